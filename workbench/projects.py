"""Project business logic module."""

from decimal import Decimal
from typing import List, Optional

from workbench.binding import to_decimal, to_integer
from workbench.entities import Project
from workbench.services import ProjectService


# 서비스 초기화
project_service = ProjectService()


def add_project(project: Project) -> Project:
    """Insert a project and return it with its new project_id."""
    return project_service.add_project(project)


def fetch_all_projects() -> List[Project]:
    """List all projects ordered by name."""
    return project_service.fetch_all_projects()


def fetch_project_by_id(project_id: int) -> Project:
    """Get a project with its materials, steps and categories."""
    return project_service.fetch_project_by_id(project_id)


def modify_project_details(project: Project) -> None:
    """Overwrite a project's name, hours, difficulty and notes."""
    project_service.modify_project_details(project)


def delete_project(project_id: int) -> None:
    """Delete a project by ID."""
    project_service.delete_project(project_id)


def parse_text(raw: Optional[str]) -> Optional[str]:
    """Blank input means "no value"."""
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_decimal(raw: Optional[str]) -> Optional[Decimal]:
    """Parse user input as hours with two decimal places.

    Raises:
        ValueError: input is not a decimal number.
    """
    text = parse_text(raw)
    if text is None:
        return None
    try:
        return to_decimal(text)
    except ValueError:
        raise ValueError(f"{text} is not a decimal number. Try again.") from None


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse user input as an integer.

    Raises:
        ValueError: input is not a valid number.
    """
    text = parse_text(raw)
    if text is None:
        return None
    try:
        return to_integer(text)
    except ValueError:
        raise ValueError(f"{text} is not a valid number. Try again.") from None
