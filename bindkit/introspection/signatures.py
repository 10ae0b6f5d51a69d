"""
BindKit Signature Table Parsing

Loads the hand-maintained interfaces.json that declares the Go shape of every
interface member:

    {
      "Page": {
        "extends": ["EventEmitter"],
        "Close": ["options ...PageCloseOptions", "error"],
        "URL": ["", "string"]
      }
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, IO

from pydantic import TypeAdapter, ValidationError

from bindkit.core.constants import GenerationDefaults
from bindkit.core.schema import SignatureTable, Signature, Inheritance, SignatureEntry


logger = logging.getLogger(__name__)


class SignatureTableError(ValueError):
    """Raised when the signature table cannot be read or is malformed."""


_RAW_TABLE = TypeAdapter(Dict[str, Dict[str, List[Optional[str]]]])


def load_signature_table(
    source: Union[str, Path, IO[str]],
    inheritance_key: str = GenerationDefaults.INHERITANCE_KEY
) -> SignatureTable:
    """
    Load the signature table from a JSON file or text stream.

    Raises:
        SignatureTableError: If the document cannot be read, decoded or validated
    """
    try:
        if hasattr(source, "read"):
            data = json.load(source)
        else:
            with open(source, 'r', encoding='utf-8') as f:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise SignatureTableError(f"Invalid JSON in signature table: {e}") from e
    except OSError as e:
        raise SignatureTableError(f"Failed to read signature table from {source}: {e}") from e

    return parse_signature_table(data, inheritance_key)


def parse_signature_table(data: Any, inheritance_key: str = GenerationDefaults.INHERITANCE_KEY) -> SignatureTable:
    """Validate already-decoded signature table JSON."""
    try:
        raw_table = _RAW_TABLE.validate_python(data)
    except ValidationError as e:
        raise SignatureTableError(f"Signature table does not match the expected shape: {e}") from e

    classes: Dict[str, Dict[str, SignatureEntry]] = {}
    for class_name, members in raw_table.items():
        entries: Dict[str, SignatureEntry] = {}
        for member_name, raw_entry in members.items():
            entries[member_name] = _convert_entry(class_name, member_name, raw_entry, inheritance_key)
        classes[class_name] = entries

    logger.debug(f"Parsed signature table with {len(classes)} interfaces")
    return SignatureTable(classes=classes)


def _convert_entry(class_name: str, member_name: str, raw_entry: List[Optional[str]], inheritance_key: str) -> SignatureEntry:
    if member_name == inheritance_key:
        return Inheritance(parents=tuple(parent for parent in raw_entry if parent))

    if len(raw_entry) > 2:
        raise SignatureTableError(
            f"{class_name}.{member_name}: expected [params, returns], got {len(raw_entry)} entries"
        )

    params = raw_entry[0] if len(raw_entry) > 0 else None
    returns = raw_entry[1] if len(raw_entry) > 1 else None
    return Signature(params=params or "", returns=returns or "")
