"""Project repository for database operations."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from workbench.binding import ParameterBinder, ParamLike, SqlType
from workbench.db_connection import ConnectionScope
from workbench.entities import Category, Material, Project, Step
from workbench.exceptions import StorageError
from workbench.extractors import RowExtractor

logger = logging.getLogger(__name__)

CATEGORY_TABLE = 'category'
MATERIAL_TABLE = 'material'
PROJECT_TABLE = 'project'
PROJECT_CATEGORY_TABLE = 'project_category'
STEP_TABLE = 'step'


class ProjectRepository:
    """Repository for the project aggregate.

    Every public method runs in its own transaction and has committed or
    rolled back by the time it returns.
    """

    INSERT_PROJECT = f"""
        INSERT INTO {PROJECT_TABLE} (project_name, estimated_hours, actual_hours, difficulty, notes)
        VALUES (%s, %s, %s, %s, %s)
    """
    SELECT_ALL_PROJECTS = f"SELECT * FROM {PROJECT_TABLE} ORDER BY project_name"
    SELECT_PROJECT = f"SELECT * FROM {PROJECT_TABLE} WHERE project_id = %s"
    SELECT_MATERIALS = f"SELECT * FROM {MATERIAL_TABLE} WHERE project_id = %s"
    SELECT_STEPS = f"SELECT * FROM {STEP_TABLE} WHERE project_id = %s"
    SELECT_CATEGORIES = f"""
        SELECT c.* FROM {CATEGORY_TABLE} c
        JOIN {PROJECT_CATEGORY_TABLE} pc USING (category_id)
        WHERE project_id = %s
    """
    UPDATE_PROJECT = f"""
        UPDATE {PROJECT_TABLE}
        SET project_name=%s, estimated_hours=%s, actual_hours=%s, difficulty=%s, notes=%s
        WHERE project_id=%s
    """
    DELETE_PROJECT = f"DELETE FROM {PROJECT_TABLE} WHERE project_id=%s"

    def __init__(self, scope: ConnectionScope = None, binder: ParameterBinder = None,
                 extractor: RowExtractor = None):
        self.scope = scope or ConnectionScope()
        self.binder = binder or ParameterBinder()
        self.extractor = extractor or RowExtractor()

    def insert(self, project: Project) -> Project:
        """Insert the project row and assign the store-generated id.

        Child rows are not inserted.

        Raises:
            ValueError: the project already has an id.
        """
        if project.project_id is not None:
            raise ValueError(f"Project already has project_id={project.project_id}")

        def body(conn) -> int:
            cursor = conn.cursor(dictionary=True)
            try:
                self.binder.execute(cursor, self.INSERT_PROJECT, self._detail_params(project))
                if not cursor.lastrowid:
                    raise StorageError("Insert did not return a generated project_id")
                return cursor.lastrowid
            finally:
                cursor.close()

        project_id = self._run('insert', body)
        project.project_id = project_id
        logger.info("Inserted project %s (%s)", project_id, project.project_name)
        return project

    def fetch_all(self) -> List[Project]:
        """List every project ordered by name, without child collections."""
        def body(conn) -> List[Project]:
            rows = self._query(conn, self.SELECT_ALL_PROJECTS)
            return [self.extractor.extract(row, Project) for row in rows]

        return self._run('fetch_all', body)

    def fetch_by_id(self, project_id: int) -> Optional[Project]:
        """Load one project together with its materials, steps and categories.

        Returns None when no project has ``project_id``; child tables are
        not queried in that case. Children are attached only after all
        three child queries have succeeded.
        """
        def body(conn) -> Optional[Project]:
            id_param = [(project_id, SqlType.INTEGER)]
            rows = self._query(conn, self.SELECT_PROJECT, id_param)
            if not rows:
                return None
            project = self.extractor.extract(rows[0], Project)

            materials = [self.extractor.extract(row, Material)
                         for row in self._query(conn, self.SELECT_MATERIALS, id_param)]
            steps = [self.extractor.extract(row, Step)
                     for row in self._query(conn, self.SELECT_STEPS, id_param)]
            categories = [self.extractor.extract(row, Category)
                          for row in self._query(conn, self.SELECT_CATEGORIES, id_param)]

            project.materials = materials
            project.steps = steps
            project.categories = categories
            return project

        return self._run('fetch_by_id', body)

    def update(self, project: Project) -> bool:
        """Overwrite the five scalar fields. True if exactly one row matched."""
        params = self._detail_params(project) + [(project.project_id, SqlType.INTEGER)]

        def body(conn) -> int:
            return self._execute(conn, self.UPDATE_PROJECT, params)

        return self._run('update', body) == 1

    def delete(self, project_id: int) -> bool:
        """Delete the project row. True if exactly one row was removed."""
        def body(conn) -> int:
            return self._execute(conn, self.DELETE_PROJECT, [(project_id, SqlType.INTEGER)])

        return self._run('delete', body) == 1

    def _run(self, operation: str, body):
        logger.debug("ProjectRepository.%s", operation)
        return self.scope.with_transaction(body)

    @staticmethod
    def _detail_params(project: Project) -> List[ParamLike]:
        return [
            (project.project_name, SqlType.STRING),
            (project.estimated_hours, SqlType.DECIMAL),
            (project.actual_hours, SqlType.DECIMAL),
            (project.difficulty, SqlType.INTEGER),
            (project.notes, SqlType.STRING),
        ]

    def _query(self, conn, query: str, params: Sequence[ParamLike] = ()) -> List[Dict[str, Any]]:
        cursor = conn.cursor(dictionary=True)
        try:
            self.binder.execute(cursor, query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def _execute(self, conn, query: str, params: Sequence[ParamLike]) -> int:
        cursor = conn.cursor(dictionary=True)
        try:
            self.binder.execute(cursor, query, params)
            return cursor.rowcount
        finally:
            cursor.close()
