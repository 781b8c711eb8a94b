"""
LeadMerge matching package - grouping records by identifying keys.
"""

from .index import (
    DuplicateValue,
    KeyIndex,
    bucket_token,
    build_index,
    find_duplicate_values
)

__all__ = [
    'DuplicateValue',
    'KeyIndex',
    'bucket_token',
    'build_index',
    'find_duplicate_values'
]
