"""
LeadMerge - Duplicate lead record consolidation
"""

from .exceptions import (
    LeadMergeError,
    ConfigurationError,
    LoadError,
    WriteError,
    MergeError,
    ConvergenceError
)

from .config import ConsolidationConfig, MissingKeyPolicy, DEFAULT_KEYS
from .model import MISSING, LeadRecord
from .match import DuplicateValue, KeyIndex, build_index, find_duplicate_values
from .merge import (
    FieldChange,
    GroupMerger,
    MergeOutcome,
    ConsolidationResult,
    Consolidator
)
from .connectors import load_leads, write_consolidated

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LeadMergeError",
    "ConfigurationError",
    "LoadError",
    "WriteError",
    "MergeError",
    "ConvergenceError",
    
    # Configuration
    "ConsolidationConfig",
    "MissingKeyPolicy",
    "DEFAULT_KEYS",
    
    # Records and indexing
    "MISSING",
    "LeadRecord",
    "DuplicateValue",
    "KeyIndex",
    "build_index",
    "find_duplicate_values",
    
    # Merging
    "FieldChange",
    "GroupMerger",
    "MergeOutcome",
    "ConsolidationResult",
    "Consolidator",
    
    # File I/O
    "load_leads",
    "write_consolidated"
]
