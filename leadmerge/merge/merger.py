"""
Group merger implementation for LeadMerge.
"""

from typing import Any, List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from leadmerge.exceptions import MergeError
from leadmerge.model import (
    DEFAULT_TIMESTAMP_FIELD,
    LeadRecord,
    entry_date_sort_key,
    values_differ
)
from leadmerge.utils.logging import setup_logging


@dataclass
class FieldChange:
    """A single field added to or overwritten on a surviving record."""
    field_name: str
    old_value: Any
    new_value: Any
    added: bool = False


@dataclass
class MergeOutcome:
    """What happened when a duplicate group was merged."""
    key: str
    value: Any
    survivor: LeadRecord
    absorbed: List[LeadRecord] = field(default_factory=list)
    changes: List[FieldChange] = field(default_factory=list)
    pass_number: int = 0
    
    @property
    def group_size(self) -> int:
        return len(self.absorbed) + 1


class GroupMerger:
    """Merges records sharing an identifying key value into one record.
    
    The oldest record of the group survives. Walking the group from oldest
    to newest, every field a record defines is added to the survivor if
    missing, or overwritten if the record's value differs, so the newest
    differing value of each field wins.
    """
    
    def __init__(
        self,
        timestamp_field: str = DEFAULT_TIMESTAMP_FIELD,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the group merger.
        
        Args:
            timestamp_field: Field ordering records chronologically
            logger: Optional logger receiving merge decisions
        """
        self.timestamp_field = timestamp_field
        self.logger = logger or setup_logging(__name__)
        self.last_outcome: Optional[MergeOutcome] = None
        
    def sort_group(self, bucket: Sequence[LeadRecord]) -> List[LeadRecord]:
        """Order a group oldest first. Ties keep their input order."""
        return sorted(
            bucket,
            key=lambda record: entry_date_sort_key(record.entry_date)
        )
        
    def merge_group(self, bucket: Sequence[LeadRecord], key: str) -> LeadRecord:
        """Merge a group of duplicate records.
        
        Args:
            bucket: Records sharing one value of ``key``
            key: Identifying key the group was formed on
            
        Returns:
            The surviving record, updated in place
            
        Raises:
            MergeError: If the group is empty
        """
        if not bucket:
            raise MergeError(
                f"Cannot merge an empty group for key {key}",
                details={"key": key}
            )
            
        if len(bucket) == 1:
            survivor = bucket[0]
            self.last_outcome = MergeOutcome(
                key=key,
                value=survivor.key_value(key),
                survivor=survivor
            )
            return survivor
            
        ordered = self.sort_group(bucket)
        survivor = ordered[0]
        outcome = MergeOutcome(
            key=key,
            value=survivor.key_value(key),
            survivor=survivor,
            absorbed=ordered[1:]
        )
        
        self.logger.info(
            f"Consolidating {len(ordered)} records with duplicate {key}"
        )
        self.logger.info(
            f"Updating record with {key} of {survivor.key_value(key)} "
            f"and timestamp of {survivor.get(self.timestamp_field)}"
        )
        
        for record in ordered:
            # The survivor compares against itself first; nothing changes.
            for name, value in list(record.fields.items()):
                if name not in survivor:
                    self.logger.info(
                        f"Oldest record does not contain key {name}. Adding."
                    )
                    survivor[name] = value
                    outcome.changes.append(
                        FieldChange(name, None, value, added=True)
                    )
                elif values_differ(value, survivor[name]):
                    self.logger.info(
                        f"Newer data found for {name}. "
                        f"Updating from {survivor[name]} to {value}"
                    )
                    outcome.changes.append(
                        FieldChange(name, survivor[name], value)
                    )
                    survivor[name] = value
                    
        self.last_outcome = outcome
        return survivor
