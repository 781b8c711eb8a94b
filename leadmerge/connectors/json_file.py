from typing import List, Dict, Any, Sequence, Union
from pathlib import Path
import json

from leadmerge.exceptions import LoadError, WriteError
from leadmerge.model import LeadRecord


def load_leads(
    path: Union[str, Path],
    collection_field: str = "leads",
    encoding: str = "utf-8"
) -> List[Dict[str, Any]]:
    """Read lead records from a JSON file.
    
    The file holds an object whose ``collection_field`` member is an array
    of record objects. A top-level array is accepted as the records
    themselves.
    
    Args:
        path: JSON file to read
        collection_field: Member holding the records
        encoding: File encoding
        
    Returns:
        List of record dictionaries
        
    Raises:
        LoadError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    details = {"path": str(path)}
    
    try:
        with open(path, 'r', encoding=encoding) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise LoadError(f"Lead file not found: {path}", details=details)
    except json.JSONDecodeError as e:
        raise LoadError(
            f"Lead file {path} is not valid JSON: {e.msg} "
            f"(line {e.lineno}, column {e.colno})",
            details=details
        )
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Error reading lead file {path}: {str(e)}", details=details)
        
    # Handle both array and object JSON formats
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        if collection_field not in data:
            raise LoadError(
                f"Lead file {path} has no '{collection_field}' member",
                details=details
            )
        records = data[collection_field]
        if not isinstance(records, list):
            raise LoadError(
                f"'{collection_field}' in {path} must be an array",
                details=details
            )
    else:
        raise LoadError(
            f"Lead file {path} must contain a JSON object or array",
            details=details
        )
        
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise LoadError(
                f"Record {position} in {path} is not a JSON object",
                details={**details, "position": position}
            )
            
    return records


def write_consolidated(
    records: Sequence[Union[LeadRecord, Dict[str, Any]]],
    path: Union[str, Path],
    encoding: str = "utf-8"
) -> int:
    """Write consolidated records to a JSON file.
    
    Args:
        records: Records to write
        path: Destination file, replaced if it exists
        encoding: File encoding
        
    Returns:
        Number of records written
        
    Raises:
        WriteError: If the file cannot be written
    """
    path = Path(path)
    payload = [
        record.to_dict() if isinstance(record, LeadRecord) else dict(record)
        for record in records
    ]
    
    try:
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding=encoding) as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except (OSError, TypeError, ValueError) as e:
        raise WriteError(
            f"Error writing consolidated records to {path}: {str(e)}",
            details={"path": str(path)}
        )
        
    return len(payload)
