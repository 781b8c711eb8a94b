"""
LeadMerge Configuration Module - Settings for a consolidation run.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field, fields, asdict
from enum import Enum

from leadmerge.exceptions import ConfigurationError


DEFAULT_KEYS = ["_id", "email"]


class MissingKeyPolicy(str, Enum):
    """How records lacking an identifying key are grouped."""
    BUCKET = "bucket"
    SKIP = "skip"


@dataclass
class ConsolidationConfig:
    """Configuration for a consolidation run."""
    keys: List[str] = field(default_factory=lambda: list(DEFAULT_KEYS))
    timestamp_field: str = "entryDate"
    max_passes: int = 100
    missing_key_policy: MissingKeyPolicy = MissingKeyPolicy.BUCKET
    collection_field: str = "leads"
    output_file: str = "consolidated-leads.json"
    log_file: str = "change.log"
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.keys, str):
            self.keys = [self.keys]
        else:
            self.keys = list(self.keys or [])
        self._validate_config()
        
    def _validate_config(self):
        """Validate the configuration settings."""
        if not self.keys:
            raise ConfigurationError("At least one identifying key must be defined")
            
        for key in self.keys:
            if not isinstance(key, str) or not key:
                raise ConfigurationError(
                    f"Identifying keys must be non-empty strings (got {key!r})"
                )
                
        if len(self.keys) != len(set(self.keys)):
            raise ConfigurationError(
                "Identifying keys must be unique",
                details={"keys": self.keys}
            )
            
        if not self.timestamp_field:
            raise ConfigurationError("A timestamp field must be defined")
            
        if isinstance(self.max_passes, bool) or not isinstance(self.max_passes, int) or self.max_passes < 1:
            raise ConfigurationError(
                f"max_passes must be a positive integer (got {self.max_passes!r})"
            )
            
        try:
            self.missing_key_policy = MissingKeyPolicy(self.missing_key_policy)
        except ValueError:
            allowed = ", ".join(policy.value for policy in MissingKeyPolicy)
            raise ConfigurationError(
                f"Unknown missing_key_policy {self.missing_key_policy!r} "
                f"(expected one of: {allowed})"
            )
            
    @property
    def skip_missing(self) -> bool:
        return self.missing_key_policy is MissingKeyPolicy.SKIP
        
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConsolidationConfig":
        """Create a configuration from a plain mapping.
        
        Raises:
            ConfigurationError: If the mapping holds unknown settings
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration settings: {', '.join(unknown)}",
                details={"unknown": unknown}
            )
        return cls(**data)
        
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["missing_key_policy"] = self.missing_key_policy.value
        return data
