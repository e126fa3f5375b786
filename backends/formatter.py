"""Turns file groups into the document returned to tool callers."""

import json
from typing import Dict, List, Sequence

from backends.models import FileGroup

UNKNOWN_FILE = "unknown-file"
MATCH_SEPARATOR = "\n\n" + "-" * 40 + "\n"


def format_groups(groups: Sequence[FileGroup]) -> Dict[str, str]:
    """Map each file to the joined context of all its matches.

    Args:
        groups: File groups from the aggregator

    Returns:
        Mapping of file path to text; files without a name use ``unknown-file``
    """
    blocks: Dict[str, List[str]] = {}
    for group in groups:
        key = group.file or UNKNOWN_FILE
        file_blocks = blocks.setdefault(key, [])
        for match in group.matches:
            file_blocks.append("\n".join(match.context))
    return {key: MATCH_SEPARATOR.join(file_blocks) for key, file_blocks in blocks.items()}


def serialize(document: Dict[str, str]) -> str:
    """Serialize a formatted document as a JSON object."""
    return json.dumps(document, ensure_ascii=False)


def serialize_groups(groups: Sequence[FileGroup]) -> str:
    """Format and serialize file groups in one step."""
    return serialize(format_groups(groups))
