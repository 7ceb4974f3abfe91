"""
Seed data loading.

The seed file is the JSON list of timeline documents written by `timeline fetch`.
Its projects are read-only in the store.
"""

import json
import logging
from pathlib import Path

from timeline.lib.models import ProjectData
from timeline.lib.normalize import parse_document_data

logger = logging.getLogger(__name__)


def parse_seed_documents(documents: list) -> list[ProjectData]:
    """Validate and normalize seed documents. Invalid entries are skipped."""
    projects = []
    for index, document in enumerate(documents):
        result = parse_document_data(document)
        if not result.success:
            logger.warning(f"Skipping seed project #{index}: {result.error}")
            continue
        projects.append(result.data)
    return projects


def load_seed_file(path: Path) -> list[ProjectData]:
    """Load read-only projects from the aggregate file. Missing file = no seeds."""
    if not path.exists():
        return []

    try:
        documents = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load seed projects from {path}: {e}")
        return []

    if not isinstance(documents, list):
        logger.warning(f"Seed file {path} must contain a JSON list of timeline documents")
        return []

    return parse_seed_documents(documents)
