"""Data models for files and duplicate groups."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, Optional


def file_extension(name: str) -> str:
    """Return the lowercase suffix after the last dot of a file name.

    Names without a dot, or ending with one, have an empty extension.
    """
    _, dot, suffix = name.rpartition(".")
    return suffix.lower() if dot else ""


class Trait(NamedTuple):
    """Cheap equality key; files with different traits cannot be duplicates."""

    size: int
    extension: Optional[str]


@dataclass(frozen=True)
class FileDescriptor:
    """A regular file found on disk."""

    path: Path
    size: int
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "FileDescriptor":
        """Build a descriptor from filesystem metadata.

        Raises:
            OSError: If the file cannot be stat'ed
        """
        absolute = path.absolute()
        return cls(
            path=absolute,
            size=absolute.stat().st_size,
            extension=file_extension(absolute.name),
        )

    @property
    def name(self) -> str:
        return self.path.name

    def trait(self, extension_sensitive: bool) -> Trait:
        """Key used to decide whether this file needs hashing."""
        if extension_sensitive:
            return Trait(self.size, self.extension)
        return Trait(self.size, None)


@dataclass
class DuplicateGroup:
    """A group of files sharing one SHA-256 digest."""

    group_id: int
    digest: bytes
    files: list[FileDescriptor]

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()

    @property
    def count(self) -> int:
        """Number of duplicate files in this group."""
        return len(self.files)

    @property
    def size(self) -> int:
        """Size of one file (all members have identical content)."""
        return self.files[0].size if self.files else 0

    @property
    def total_size(self) -> int:
        """Total size of all duplicates in this group."""
        return self.size * self.count

    @property
    def wasted_size(self) -> int:
        """Wasted space (size of all duplicates except one)."""
        return self.size * (self.count - 1)

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.files]


@dataclass
class ScanResult:
    """Outcome of one detection run."""

    groups: list[DuplicateGroup] = field(default_factory=list)
    files_scanned: int = 0
    hash_requests: int = 0
    hash_failures: int = 0

    @property
    def duplicate_files(self) -> int:
        return sum(g.count for g in self.groups)

    @property
    def wasted_size(self) -> int:
        return sum(g.wasted_size for g in self.groups)
