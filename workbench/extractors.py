"""Row-to-entity mapping, one explicit function per entity kind."""

from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from workbench.binding import to_decimal
from workbench.entities import Category, Material, Project, Step
from workbench.exceptions import MappingError

T = TypeVar('T')


def _column(row: Mapping[str, Any], name: str) -> Any:
    try:
        return row[name]
    except (KeyError, IndexError, TypeError):
        raise MappingError(f"Expected column '{name}' is missing from row") from None


def _decimal_column(row: Mapping[str, Any], name: str) -> Optional[Decimal]:
    value = _column(row, name)
    if value is None:
        return None
    try:
        return to_decimal(value)
    except ValueError as e:
        raise MappingError(f"Column '{name}' is not a decimal: {value!r}", cause=e) from e


def extract_project(row: Mapping[str, Any]) -> Project:
    """Map a ``project`` row. Child collections are left empty."""
    return Project(
        project_id=_column(row, 'project_id'),
        project_name=_column(row, 'project_name'),
        estimated_hours=_decimal_column(row, 'estimated_hours'),
        actual_hours=_decimal_column(row, 'actual_hours'),
        difficulty=_column(row, 'difficulty'),
        notes=_column(row, 'notes'),
    )


def extract_material(row: Mapping[str, Any]) -> Material:
    return Material(
        material_id=_column(row, 'material_id'),
        project_id=_column(row, 'project_id'),
        material_name=_column(row, 'material_name'),
        num_required=_column(row, 'num_required'),
        cost=_decimal_column(row, 'cost'),
    )


def extract_step(row: Mapping[str, Any]) -> Step:
    return Step(
        step_id=_column(row, 'step_id'),
        project_id=_column(row, 'project_id'),
        step_text=_column(row, 'step_text'),
        step_order=_column(row, 'step_order'),
    )


def extract_category(row: Mapping[str, Any]) -> Category:
    return Category(
        category_id=_column(row, 'category_id'),
        category_name=_column(row, 'category_name'),
    )


class RowExtractor:
    """Dispatches a fetched row to the mapping function for an entity kind."""

    _EXTRACTORS: Dict[type, Callable[[Mapping[str, Any]], Any]] = {
        Project: extract_project,
        Material: extract_material,
        Step: extract_step,
        Category: extract_category,
    }

    def extract(self, row: Mapping[str, Any], kind: Type[T]) -> T:
        try:
            extractor = self._EXTRACTORS[kind]
        except KeyError:
            raise MappingError(f"No row mapping registered for {kind!r}") from None
        return extractor(row)
