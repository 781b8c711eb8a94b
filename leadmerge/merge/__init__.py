"""
LeadMerge Merge Module - Merging duplicate groups and iterating to a fixed point.
"""

from .merger import FieldChange, GroupMerger, MergeOutcome
from .consolidator import ConsolidationResult, Consolidator

__all__ = [
    'FieldChange',
    'GroupMerger',
    'MergeOutcome',
    'ConsolidationResult',
    'Consolidator'
]
