"""
Lead record model for LeadMerge.
"""

from typing import Any, Dict, Iterator, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime, timezone


class _Missing:
    """Marker for a field a record does not define."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
        
    def __repr__(self) -> str:
        return "<missing>"
        
    def __bool__(self) -> bool:
        return False
        
    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()

DEFAULT_TIMESTAMP_FIELD = "entryDate"


def parse_entry_date(value: Any) -> Optional[datetime]:
    """Parse a timestamp value into an aware datetime.
    
    Args:
        value: ISO-8601 string or epoch seconds
        
    Returns:
        Parsed datetime, or None if the value cannot be interpreted
    """
    if isinstance(value, bool) or value is None:
        return None
        
    parsed = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
            
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def entry_date_sort_key(value: Any) -> Tuple:
    """Ordering key for timestamp values, oldest first.
    
    Missing timestamps sort before everything else, parsed dates sort
    chronologically, and unparseable values sort last by their text.
    """
    if value is None or value is MISSING:
        return (0, "")
    parsed = parse_entry_date(value)
    if parsed is not None:
        return (1, parsed)
    return (2, str(value))


def values_differ(old: Any, new: Any) -> bool:
    """Whether two field values differ.
    
    Booleans never equal numbers, so ``false`` replaces ``0``.
    """
    if isinstance(old, bool) != isinstance(new, bool):
        return True
    return old != new


@dataclass(eq=False)
class LeadRecord:
    """A user record with typed access to the fields merging depends on.
    
    Arbitrary fields live in the ordered ``fields`` mapping; the timestamp
    field name and the record's position in the input are kept alongside.
    """
    fields: Dict[str, Any] = field(default_factory=dict)
    timestamp_field: str = DEFAULT_TIMESTAMP_FIELD
    position: int = -1
    
    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        timestamp_field: str = DEFAULT_TIMESTAMP_FIELD,
        position: int = -1
    ) -> "LeadRecord":
        """Wrap a plain mapping. The mapping is copied."""
        return cls(
            fields=dict(data),
            timestamp_field=timestamp_field,
            position=position
        )
        
    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields)
        
    @property
    def entry_date(self) -> Any:
        return self.fields.get(self.timestamp_field, MISSING)
        
    def key_value(self, key: str) -> Any:
        """Value of an identifying key, or MISSING if absent."""
        return self.fields.get(key, MISSING)
        
    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)
        
    def __contains__(self, name: object) -> bool:
        return name in self.fields
        
    def __getitem__(self, name: str) -> Any:
        return self.fields[name]
        
    def __setitem__(self, name: str, value: Any) -> None:
        self.fields[name] = value
        
    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)
        
    def __len__(self) -> int:
        return len(self.fields)
        
    def __repr__(self) -> str:
        return f"LeadRecord({self.fields!r})"
