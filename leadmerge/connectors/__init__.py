"""
LeadMerge connectors - reading lead files and writing consolidated output.
"""

from .json_file import load_leads, write_consolidated

__all__ = ['load_leads', 'write_consolidated']
