"""Entity types for the project aggregate."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class Material:
    material_id: Optional[int] = None
    project_id: Optional[int] = None
    material_name: Optional[str] = None
    num_required: Optional[int] = None
    cost: Optional[Decimal] = None

    def __str__(self) -> str:
        return (f"ID={self.material_id}, name={self.material_name}, "
                f"required={self.num_required}, cost={self.cost}")


@dataclass
class Step:
    step_id: Optional[int] = None
    project_id: Optional[int] = None
    step_text: Optional[str] = None
    step_order: Optional[int] = None

    def __str__(self) -> str:
        return f"ID={self.step_id}, order={self.step_order}, text={self.step_text}"


@dataclass
class Category:
    category_id: Optional[int] = None
    category_name: Optional[str] = None

    def __str__(self) -> str:
        return f"ID={self.category_id}, name={self.category_name}"


@dataclass
class Project:
    """Aggregate root: a project row plus the child rows it owns.

    ``project_id`` is assigned by the store on insert and may not be
    changed afterwards. Child collections stay empty unless the project
    was loaded with ``ProjectRepository.fetch_by_id``.
    """

    project_name: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None
    notes: Optional[str] = None
    project_id: Optional[int] = None
    materials: List[Material] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def __setattr__(self, name, value):
        if name == 'project_id':
            current = self.__dict__.get('project_id')
            if current is not None and value != current:
                raise ValueError(
                    f"project_id is immutable once assigned (was {current}, got {value})"
                )
        super().__setattr__(name, value)

    def with_details(self, *, project_name: str = None, estimated_hours: Decimal = None,
                     actual_hours: Decimal = None, difficulty: int = None,
                     notes: str = None) -> 'Project':
        """Copy of the scalar fields, overriding any value that is not None."""
        return Project(
            project_id=self.project_id,
            project_name=self.project_name if project_name is None else project_name,
            estimated_hours=self.estimated_hours if estimated_hours is None else estimated_hours,
            actual_hours=self.actual_hours if actual_hours is None else actual_hours,
            difficulty=self.difficulty if difficulty is None else difficulty,
            notes=self.notes if notes is None else notes,
        )

    def __str__(self) -> str:
        lines = [
            f"\n   ID={self.project_id}",
            f"   name={self.project_name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
            "   Materials:",
        ]
        lines.extend(f"      {material}" for material in self.materials)
        lines.append("   Steps:")
        lines.extend(f"      {step}" for step in self.steps)
        lines.append("   Categories:")
        lines.extend(f"      {category}" for category in self.categories)
        return "\n".join(lines)
