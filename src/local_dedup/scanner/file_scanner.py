"""Local directory scanner."""

import os
from pathlib import Path
from typing import Iterable, Iterator

from ..common.exceptions import ScanError
from ..common.logging import get_logger
from ..detector.models import FileDescriptor, file_extension

logger = get_logger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lowercase an allow-list and strip leading dots."""
    return frozenset(ext.strip().lower().removeprefix(".") for ext in extensions)


def has_extension(name: str, extensions: frozenset[str]) -> bool:
    """Check a file name against a normalized allow-list."""
    return file_extension(name) in extensions


class FileScanner:
    """Walks a directory tree and yields matching files."""

    def __init__(self, root: Path, extensions: Iterable[str]) -> None:
        """Initialize file scanner.

        Args:
            root: Directory to walk recursively
            extensions: Allowed file extensions, case-insensitive
        """
        self.root = Path(root)
        self.extensions = normalize_extensions(extensions)

    def scan_files(self) -> Iterator[FileDescriptor]:
        """Lazily scan the tree for files with an allowed extension.

        Yields:
            FileDescriptor instances in traversal order

        Raises:
            ScanError: On the first traversal or stat failure
        """
        if not self.root.is_dir():
            raise ScanError(f"Not a directory: {self.root}")

        logger.debug(f"Walking {self.root} for extensions {sorted(self.extensions)}")

        for dirpath, _dirnames, filenames in os.walk(self.root, onerror=_raise_scan_error):
            for name in filenames:
                if not has_extension(name, self.extensions):
                    continue

                path = Path(dirpath) / name
                try:
                    descriptor = FileDescriptor.from_path(path)
                except OSError as e:
                    raise ScanError(f"Failed to read metadata of {path}: {e}") from e

                yield descriptor


def _raise_scan_error(error: OSError) -> None:
    raise ScanError(f"Failed to walk {error.filename}: {error.strerror}") from error
