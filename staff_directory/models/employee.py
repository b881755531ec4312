"""Employee record definitions."""

from dataclasses import dataclass, field, replace


@dataclass
class Employee:
    """Represents a single directory entry."""

    id: str
    name: str
    age: int
    class_name: str
    subjects: list[str] = field(default_factory=list)
    attendance: int = 0
    flagged: bool = False
    created_at: str = ""

    def copy(self) -> "Employee":
        return replace(self, subjects=list(self.subjects))


# id and created_at are assigned by the store and never change.
EDITABLE_FIELDS = frozenset({"name", "age", "class_name", "subjects", "attendance", "flagged"})
