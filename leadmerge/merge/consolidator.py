"""
Iterative multi-key consolidation for LeadMerge.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from dataclasses import dataclass, field
import logging

from leadmerge.config import ConsolidationConfig
from leadmerge.exceptions import ConvergenceError
from leadmerge.match import DuplicateValue, KeyIndex, find_duplicate_values
from leadmerge.merge.merger import GroupMerger, MergeOutcome
from leadmerge.model import MISSING, LeadRecord
from leadmerge.utils.logging import setup_logging


RecordLike = Union[LeadRecord, Mapping[str, Any]]


@dataclass
class ConsolidationResult:
    """Summary of a completed consolidation run."""
    records: List[LeadRecord]
    passes: int
    input_count: int
    merges: List[MergeOutcome] = field(default_factory=list)
    
    @property
    def absorbed_count(self) -> int:
        return self.input_count - len(self.records)


class Consolidator:
    """Merges duplicate records until no identifying key value repeats.
    
    Each pass indexes the records under every identifying key, merges the
    duplicate groups it finds, then rescans the output. A merge can give a
    survivor a value that collides under a different key, so passes repeat
    until the scan comes back clean or ``max_passes`` is exceeded.
    """
    
    def __init__(
        self,
        config: Optional[ConsolidationConfig] = None,
        merger: Optional[GroupMerger] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the consolidator.
        
        Args:
            config: Run configuration, defaults to ConsolidationConfig()
            merger: Optional group merger; one sharing ``logger`` is created
            logger: Optional logger receiving merge decisions
        """
        self.config = config or ConsolidationConfig()
        self.logger = logger or setup_logging(__name__)
        self.merger = merger or GroupMerger(
            timestamp_field=self.config.timestamp_field,
            logger=self.logger
        )
        self.last_result: Optional[ConsolidationResult] = None
        
    @property
    def keys(self) -> List[str]:
        return self.config.keys
        
    def _wrap(self, records: Sequence[RecordLike]) -> List[LeadRecord]:
        wrapped = []
        for position, record in enumerate(records):
            if isinstance(record, LeadRecord):
                wrapped.append(record)
            else:
                wrapped.append(LeadRecord.from_dict(
                    record,
                    timestamp_field=self.config.timestamp_field,
                    position=position
                ))
        return wrapped
        
    def _partition(self, records: Sequence[LeadRecord]) -> List[tuple]:
        """Assign each record to at most one duplicate group.
        
        Keys are walked in configured order. Within a bucket, only records
        not already claimed by an earlier group count towards a new group.
        
        Returns:
            List of (key, members) groups with at least two members
        """
        index = KeyIndex(records, self.keys)
        claimed = set()
        groups = []
        
        for key in self.keys:
            for bucket in index.buckets(key).values():
                members = [r for r in bucket if id(r) not in claimed]
                if len(members) < 2:
                    continue
                if members[0].key_value(key) is MISSING:
                    if self.config.skip_missing:
                        continue
                    self.logger.warning(
                        f"Grouping {len(members)} records that have no {key}"
                    )
                groups.append((key, members))
                claimed.update(id(r) for r in members)
                
        return groups
        
    def run_pass(
        self,
        records: Sequence[LeadRecord],
        pass_number: int = 1
    ) -> tuple:
        """Run a single consolidation pass.
        
        Args:
            records: Records to consolidate
            pass_number: Pass counter recorded on merge outcomes
            
        Returns:
            Tuple of (consolidated records, merge outcomes)
        """
        groups = self._partition(records)
        survivors: Dict[int, LeadRecord] = {}
        outcomes = []
        
        for key, members in groups:
            survivor = self.merger.merge_group(members, key)
            outcome = self.merger.last_outcome
            outcome.pass_number = pass_number
            outcomes.append(outcome)
            for member in members:
                survivors[id(member)] = survivor
                
        # A survivor takes the slot of its group's first-seen member.
        consolidated = []
        placed = set()
        for record in records:
            survivor = survivors.get(id(record), record)
            if id(survivor) in placed:
                continue
            placed.add(id(survivor))
            consolidated.append(survivor)
            
        return consolidated, outcomes
        
    def find_duplicates(self, records: Sequence[LeadRecord]) -> List[DuplicateValue]:
        """Identifying-key values still shared by more than one record."""
        return find_duplicate_values(
            records,
            self.keys,
            skip_missing=self.config.skip_missing
        )
        
    def resolve(self, records: Sequence[RecordLike]) -> List[LeadRecord]:
        """Consolidate records until no duplicate values remain.
        
        Args:
            records: Lead records or plain mappings
            
        Returns:
            Consolidated records
            
        Raises:
            ConvergenceError: If duplicates remain after ``max_passes`` passes
        """
        current = self._wrap(records)
        input_count = len(current)
        merges: List[MergeOutcome] = []
        pass_number = 0
        
        while True:
            pass_number += 1
            if pass_number > self.config.max_passes:
                duplicates = self.find_duplicates(current)
                raise ConvergenceError(
                    f"Failed to converge after {self.config.max_passes} passes; "
                    f"duplicate values remain: "
                    f"{', '.join(str(d) for d in duplicates)}",
                    details={
                        "passes": self.config.max_passes,
                        "duplicates": duplicates,
                        "keys": self.keys
                    }
                )
                
            current, outcomes = self.run_pass(current, pass_number)
            merges.extend(outcomes)
            
            duplicates = self.find_duplicates(current)
            if not duplicates:
                break
                
            self.logger.warning(
                "Duplicate values still exist: "
                + ", ".join(str(d) for d in duplicates)
            )
            
        self.last_result = ConsolidationResult(
            records=current,
            passes=pass_number,
            input_count=input_count,
            merges=merges
        )
        self.logger.debug(
            f"Consolidated {input_count} records into {len(current)} "
            f"in {pass_number} pass(es)"
        )
        return current
        
    def resolve_dicts(self, records: Sequence[RecordLike]) -> List[Dict[str, Any]]:
        """Consolidate records and return them as plain dictionaries."""
        return [record.to_dict() for record in self.resolve(records)]
