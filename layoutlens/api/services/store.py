import logging
from contextlib import contextmanager
from typing import Dict, Optional

from layoutlens.api.exceptions import StoreUnavailableError
from layoutlens.api.schemas.project import Project
from layoutlens.api.services.rwlock import LockTimeout, ReadWriteLock

logger = logging.getLogger(__name__)


class ProjectStore:
    """
    In-memory project store for the lifetime of the process.

    Key: project ID (string). Every access goes through a single
    map-level reader/writer lock; records are copied on the way in and
    out so callers never share the live object.
    """

    def __init__(self, lock_timeout: Optional[float] = None) -> None:
        self._projects: Dict[str, Project] = {}
        self._lock = ReadWriteLock()
        self.lock_timeout = lock_timeout

    @contextmanager
    def _shared(self):
        try:
            self._lock.acquire_read(self.lock_timeout)
        except LockTimeout as e:
            logger.error(f"Store read lock timed out after {self.lock_timeout}s")
            raise StoreUnavailableError() from e
        try:
            yield self._projects
        finally:
            self._lock.release_read()

    @contextmanager
    def _exclusive(self):
        try:
            self._lock.acquire_write(self.lock_timeout)
        except LockTimeout as e:
            logger.error(f"Store write lock timed out after {self.lock_timeout}s")
            raise StoreUnavailableError() from e
        try:
            yield self._projects
        finally:
            self._lock.release_write()

    def insert(self, project_id: str, project: Project) -> None:
        """Add or overwrite the entry at project_id"""
        with self._exclusive() as projects:
            projects[project_id] = project.model_copy(deep=True)

    def get(self, project_id: str) -> Optional[Project]:
        with self._shared() as projects:
            project = projects.get(project_id)
            return project.model_copy(deep=True) if project is not None else None

    def contains(self, project_id: str) -> bool:
        with self._shared() as projects:
            return project_id in projects

    def replace(self, project_id: str, project: Project) -> Optional[Project]:
        """
        Overwrite an existing entry.

        The existence check and the write share one exclusive acquisition,
        so concurrent replaces of the same ID are linearized. Returns the
        stored value, or None without touching the store when project_id
        is unknown.
        """
        with self._exclusive() as projects:
            if project_id not in projects:
                return None
            projects[project_id] = project.model_copy(deep=True)
            return projects[project_id].model_copy(deep=True)

    def __len__(self) -> int:
        with self._shared() as projects:
            return len(projects)
