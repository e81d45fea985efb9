import re

from dataclasses import dataclass, field
from typing import Dict, Any

from mobsmells.platform import Platform, Group, Category


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", text.lower())
    return slug.strip("_")


@dataclass(frozen=True)
class SmellEntry:
    """A single smell of the catalog.

    Entries are immutable. Two entries are equal when they describe the same
    smell, regardless of where they were loaded from (``line`` is ignored).
    """

    platform: Platform
    category: Category
    name: str
    description: str
    line: int = field(default=-1, compare=False)

    @property
    def group(self) -> Group:
        return self.category.group

    @property
    def code(self) -> str:
        return f"{self.platform.key}_{self.category.key}_{slugify(self.name)}"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "platform": self.platform.key,
            "group": self.group.key,
            "category": self.category.label,
            "name": self.name,
            "description": self.description,
        }

    def __str__(self) -> str:
        return (
            f"{self.platform.label} / {self.group.label} / {self.category.label}\n"
            + f"{self.name}: {self.description}\n"
        )
