"""
JSON persistence for mesh node records.

The file holds an ordered JSON list of node records. Writes go to a temporary
file that replaces the target, so a crash never leaves a half-written list.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from spatial_core.exceptions import CollaboratorError

logger = logging.getLogger(__name__)


class JsonNodeStore:
    """
    Node record store backed by one JSON file.

    Usage:
        store = JsonNodeStore("nodes.json")
        registry.load_records(store.load(), now)
        ...
        store.save(registry.to_records())
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[dict]:
        """
        Read stored records; a missing file yields an empty list.

        Raises:
            CollaboratorError: unreadable or malformed file
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CollaboratorError(f"Cannot read node store {self.path}: {e}") from e
        if not isinstance(records, list):
            raise CollaboratorError(f"Node store {self.path} does not contain a list")
        return records

    def save(self, records: List[dict]):
        """
        Replace stored records.

        Raises:
            CollaboratorError: write failure
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise CollaboratorError(f"Cannot write node store {self.path}: {e}") from e
        logger.debug("Saved %d node record(s) to %s", len(records), self.path)
