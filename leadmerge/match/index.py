"""
Key index construction and duplicate detection for LeadMerge.
"""

from typing import Any, Dict, Hashable, Iterable, List, Sequence
from collections import defaultdict
from dataclasses import dataclass
import json

from leadmerge.model import MISSING, LeadRecord


@dataclass(frozen=True)
class DuplicateValue:
    """A value seen more than once for an identifying key."""
    key: str
    value: Any
    
    def __str__(self) -> str:
        return f"{self.key}={self.value!r}"


def bucket_token(value: Any) -> Hashable:
    """Hashable token identifying the bucket a key value belongs to.
    
    Hashable values are used as-is; lists and objects are keyed by their
    canonical JSON text. Booleans get their own tokens so that ``true`` and
    ``1`` do not share a bucket.
    """
    if isinstance(value, bool):
        return ("__bool__", value)
    try:
        hash(value)
        return value
    except TypeError:
        return ("__json__", json.dumps(value, sort_keys=True, default=str))


def build_index(
    records: Sequence[LeadRecord],
    keys: Iterable[str]
) -> Dict[str, Dict[Hashable, List[LeadRecord]]]:
    """Partition records by the value of each identifying key.
    
    Each key gets its own independent partition of the full record set.
    Buckets appear in first-seen order and keep input order internally.
    Records without the key are bucketed together under MISSING.
    
    Args:
        records: Records to index
        keys: Identifying keys, in configured order
        
    Returns:
        Mapping of key -> bucket token -> records sharing that value
    """
    index: Dict[str, Dict[Hashable, List[LeadRecord]]] = {}
    
    for key in keys:
        buckets: Dict[Hashable, List[LeadRecord]] = defaultdict(list)
        for record in records:
            token = bucket_token(record.key_value(key))
            buckets[token].append(record)
        index[key] = dict(buckets)
        
    return index


def find_duplicate_values(
    records: Sequence[LeadRecord],
    keys: Iterable[str],
    skip_missing: bool = False
) -> List[DuplicateValue]:
    """Find identifying-key values shared by more than one record.
    
    Args:
        records: Records to scan
        keys: Identifying keys to check
        skip_missing: Whether records lacking a key are ignored for that key
        
    Returns:
        One DuplicateValue per repeat occurrence, in scan order
    """
    keys = list(keys)
    seen: Dict[str, set] = {key: set() for key in keys}
    duplicates = []
    
    for record in records:
        for key in keys:
            value = record.key_value(key)
            if skip_missing and value is MISSING:
                continue
            token = bucket_token(value)
            if token in seen[key]:
                duplicates.append(DuplicateValue(key, value))
            else:
                seen[key].add(token)
                
    return duplicates


class KeyIndex:
    """Per-key partitions of a record set."""
    
    def __init__(self, records: Sequence[LeadRecord], keys: Iterable[str]):
        self.records = list(records)
        self.keys = list(keys)
        self._index = build_index(self.records, self.keys)
        
    def buckets(self, key: str) -> Dict[Hashable, List[LeadRecord]]:
        return self._index[key]
        
    def duplicate_groups(self, key: str) -> List[List[LeadRecord]]:
        """Buckets holding more than one record for a key."""
        return [
            bucket
            for bucket in self._index[key].values()
            if len(bucket) > 1
        ]
        
    def partition_size(self, key: str) -> int:
        return sum(len(bucket) for bucket in self._index[key].values())
