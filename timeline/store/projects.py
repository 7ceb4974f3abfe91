"""
In-memory project store.

Holds two kinds of projects:
- read-only seed projects, re-supplied on every construction (the aggregate
  file written by `timeline fetch`) and never persisted by the store
- imported projects, which are mutable and written to key/value persistence
  after every mutation

An imported project whose id matches a seed project shadows it: reads return
the imported copy, the seed copy is left untouched.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from timeline.lib.constants import FILTER_ALL, IMPORTED_STORAGE_KEY
from timeline.lib.errors import ConflictError, NotFoundError, SchemaError
from timeline.lib.models import ProjectData
from timeline.lib.normalize import parse_document_data, to_document
from timeline.lib.validate import validate_schema
from timeline.store.persistence import JsonFileKeyValueStore, KeyValueStore
from timeline.store.seed import load_seed_file

logger = logging.getLogger(__name__)


@dataclass
class ProjectFilter:
    """Conjunctive project filter. "all" disables the status/priority checks."""
    status: str = FILTER_ALL
    priority: str = FILTER_ALL
    search: str = ""

    def matches(self, data: ProjectData) -> bool:
        project = data.project
        if self.status != FILTER_ALL and project.status != self.status:
            return False
        if self.priority != FILTER_ALL and project.priority != self.priority:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in project.name.lower() and needle not in (project.description or "").lower():
                return False
        return True


class ProjectStore:
    """
    Collection of canonical projects keyed by project id.

    Usage:
        store = ProjectStore(JsonFileKeyValueStore(path), seed_projects=load_seed_file(seed))
        store.insert(data)            # new projects only
        store.merge(data)             # insert-or-replace by id
        store.list(ProjectFilter(status="in_progress"))
    """

    def __init__(
        self,
        persistence: KeyValueStore,
        seed_projects: Iterable[ProjectData] = (),
        storage_key: str = IMPORTED_STORAGE_KEY,
    ):
        self.persistence = persistence
        self.storage_key = storage_key

        self._seed: list[ProjectData] = []
        for data in seed_projects:
            if any(p.id == data.id for p in self._seed):
                logger.warning(f"Duplicate seed project '{data.id}' ignored")
                continue
            self._seed.append(data)
        self._seed_ids = {p.id for p in self._seed}

        self._imported: list[ProjectData] = self._load_imported()

    # -- persistence ---------------------------------------------------------

    def _load_imported(self) -> list[ProjectData]:
        try:
            text = self.persistence.get(self.storage_key)
        except Exception as e:  # any backend failure leaves the imported set empty
            logger.error(f"Failed to load imported projects: {e}")
            return []
        if not text:
            return []

        try:
            payload = json.loads(text)
            validate_schema(payload, "imported_projects")
        except (json.JSONDecodeError, SchemaError) as e:
            logger.error(f"Ignoring corrupted imported projects under '{self.storage_key}': {e}")
            return []

        projects: list[ProjectData] = []
        for index, document in enumerate(payload):
            result = parse_document_data(document)
            if not result.success:
                logger.warning(f"Skipping stored project #{index}: {result.error}")
                continue
            if any(p.id == result.data.id for p in projects):
                logger.warning(f"Skipping duplicate stored project '{result.data.id}'")
                continue
            projects.append(result.data)
        return projects

    def _save_imported(self) -> None:
        """Write imported projects out. Failures are logged, never raised."""
        try:
            text = json.dumps([to_document(p) for p in self._imported], indent=2, default=str)
            self.persistence.set(self.storage_key, text)
        except Exception as e:  # logged only; the mutation stands
            logger.error(f"Failed to save imported projects: {e}")

    # -- queries -------------------------------------------------------------

    def _imported_index(self, project_id: str) -> Optional[int]:
        for i, data in enumerate(self._imported):
            if data.id == project_id:
                return i
        return None

    def _visible(self) -> Iterator[ProjectData]:
        """Seed projects (or their shadows) in seed order, then pure imports."""
        shadows = {p.id: p for p in self._imported if p.id in self._seed_ids}
        for data in self._seed:
            yield shadows.get(data.id, data)
        for data in self._imported:
            if data.id not in self._seed_ids:
                yield data

    def list(self, project_filter: Optional[ProjectFilter] = None) -> list[ProjectData]:
        """Projects matching the filter, in store order (no sorting)."""
        project_filter = project_filter or ProjectFilter()
        return [p for p in self._visible() if project_filter.matches(p)]

    def find_by_id(self, project_id: str) -> Optional[ProjectData]:
        """Project with this id, or None."""
        for data in self._visible():
            if data.id == project_id:
                return data
        return None

    def get(self, project_id: str) -> ProjectData:
        """
        Raises:
            NotFoundError: if no project has this id
        """
        data = self.find_by_id(project_id)
        if data is None:
            raise NotFoundError(project_id)
        return data

    def is_read_only(self, project_id: str) -> bool:
        return project_id in self._seed_ids

    def is_shadowed(self, project_id: str) -> bool:
        """True when an imported copy overrides a read-only project."""
        return project_id in self._seed_ids and self._imported_index(project_id) is not None

    def project_ids(self) -> list[str]:
        return [p.id for p in self._visible()]

    def __len__(self) -> int:
        return len(self.project_ids())

    def __contains__(self, project_id: str) -> bool:
        return self.find_by_id(project_id) is not None

    # -- mutations -----------------------------------------------------------

    def insert(self, data: ProjectData) -> None:
        """Add a new project.

        Raises:
            ConflictError: if the id already exists. Callers should offer merge() instead.
        """
        if data.id in self._seed_ids:
            raise ConflictError(data.id, read_only=True)
        if self._imported_index(data.id) is not None:
            raise ConflictError(data.id, read_only=False)

        self._imported.append(data)
        self._save_imported()

    def merge(self, data: ProjectData) -> bool:
        """Insert or replace a project by id. Returns True if an existing project was replaced.

        Replacing is wholesale (metadata and tasks). A read-only project is
        shadowed, not modified.
        """
        index = self._imported_index(data.id)
        if index is not None:
            self._imported[index] = data
            replaced = True
        else:
            self._imported.append(data)
            replaced = data.id in self._seed_ids

        self._save_imported()
        return replaced

    def remove(self, project_id: str) -> bool:
        """Delete an imported project. Returns False (and logs) if nothing was removed.

        Read-only projects cannot be removed. Clearing any selection that
        pointed at the project is the caller's job.
        """
        if project_id in self._seed_ids:
            logger.warning(f"Cannot remove built-in project: {project_id}")
            return False

        index = self._imported_index(project_id)
        if index is None:
            logger.warning(f"Cannot remove unknown project: {project_id}")
            return False

        del self._imported[index]
        self._save_imported()
        return True


def open_store(storage_path: Path, seed_path: Optional[Path] = None) -> ProjectStore:
    """Store backed by a JSON key/value file, seeded from the aggregate file if given."""
    seed_projects = load_seed_file(seed_path) if seed_path is not None else []
    return ProjectStore(JsonFileKeyValueStore(storage_path), seed_projects=seed_projects)
