"""
LeadMerge exception hierarchy.
"""
from typing import Optional, Any, Dict


class LeadMergeError(Exception):
    """Base exception class for all LeadMerge errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(LeadMergeError):
    """Raised when there is an error in configuration."""
    pass


class LoadError(LeadMergeError):
    """Raised when lead records cannot be read or parsed."""
    pass


class WriteError(LeadMergeError):
    """Raised when consolidated records cannot be written."""
    pass


class MergeError(LeadMergeError):
    """Raised when a duplicate group cannot be merged."""
    pass


class ConvergenceError(LeadMergeError):
    """Raised when duplicates persist after the maximum number of passes."""
    
    @property
    def passes(self) -> int:
        return self.details.get("passes", 0)
        
    @property
    def duplicates(self) -> list:
        return self.details.get("duplicates", [])
