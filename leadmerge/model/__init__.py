"""
LeadMerge Model Module - Lead record representation.
"""

from .record import (
    MISSING,
    DEFAULT_TIMESTAMP_FIELD,
    LeadRecord,
    parse_entry_date,
    entry_date_sort_key,
    values_differ
)

__all__ = [
    'MISSING',
    'DEFAULT_TIMESTAMP_FIELD',
    'LeadRecord',
    'parse_entry_date',
    'entry_date_sort_key',
    'values_differ'
]
