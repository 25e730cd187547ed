"""
Project service layer
"""

import logging
import uuid

from layoutlens.api.exceptions import ProjectNotFoundError
from layoutlens.api.schemas.project import Project
from layoutlens.api.services.store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectService:
    @staticmethod
    def create_project(store: ProjectStore, name: str) -> Project:
        """Create an empty project with a generated ID"""
        project_id = str(uuid.uuid4())
        project = Project(id=project_id, name=name, walls=[])

        store.insert(project_id, project)
        logger.info(f"Created project {project_id} ({name!r})")

        return project

    @staticmethod
    def get_project(store: ProjectStore, project_id: str) -> Project:
        """Fetch a copy of a stored project"""
        project = store.get(project_id)
        if project is None:
            raise ProjectNotFoundError()

        logger.debug(f"Fetched project {project_id}")
        return project

    @staticmethod
    def replace_project(store: ProjectStore, project_id: str, updated: Project) -> Project:
        """
        Replace a stored project wholesale (last writer wins).

        The payload is stored exactly as given, including an embedded id or
        name that disagrees with project_id. A mismatched id is logged but
        not corrected.
        """
        stored = store.replace(project_id, updated)
        if stored is None:
            raise ProjectNotFoundError()

        if updated.id != project_id:
            logger.warning(
                f"Project {project_id} replaced with payload carrying id {updated.id!r}"
            )
        logger.info(f"Replaced project {project_id} ({len(stored.walls)} walls)")

        return stored
