"""Repository context model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RepositoryContext:
    """Location of the enclosing repository, resolved once per command."""

    root: Path
    name: str
    parent: Path

    @classmethod
    def from_root(cls, root: Path) -> "RepositoryContext":
        """Derive name and parent from the repository's top-level directory."""
        root = Path(root)
        return cls(root=root, name=root.name, parent=root.parent)
