"""프로젝트 서비스 - 프로젝트 CRUD 비즈니스 로직"""

import logging
from typing import List

from workbench.entities import Project
from workbench.exceptions import NotFoundError
from workbench.repositories import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """프로젝트 서비스 클래스

    Wraps ProjectRepository and turns "no such row" results into
    NotFoundError. Storage faults propagate as StorageError.
    """

    def __init__(self, project_repo: ProjectRepository = None):
        self.project_repo = project_repo or ProjectRepository()

    def add_project(self, project: Project) -> Project:
        """Insert a project; the returned entity carries the new project_id."""
        return self.project_repo.insert(project)

    def fetch_all_projects(self) -> List[Project]:
        return self.project_repo.fetch_all()

    def fetch_project_by_id(self, project_id: int) -> Project:
        """Load a project with materials, steps and categories.

        Raises:
            NotFoundError: no project has this id.
        """
        project = self.project_repo.fetch_by_id(project_id)
        if project is None:
            raise NotFoundError(project_id)
        return project

    def modify_project_details(self, project: Project) -> None:
        """Overwrite the project's scalar fields.

        Raises:
            NotFoundError: no project row matched ``project.project_id``.
        """
        if not self.project_repo.update(project):
            logger.info("Update matched no project with id %s", project.project_id)
            raise NotFoundError(project.project_id)

    def delete_project(self, project_id: int) -> None:
        """Delete a project by id.

        Raises:
            NotFoundError: no project row was removed.
        """
        if not self.project_repo.delete(project_id):
            logger.info("Delete matched no project with id %s", project_id)
            raise NotFoundError(project_id)
