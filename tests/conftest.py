"""Shared pytest fixtures."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterator

import pytest

from local_dedup.config.settings import Settings, reset_settings
from local_dedup.detector.models import FileDescriptor, file_extension

CONTENT_X = b"x" * 100
CONTENT_Y = b"y" * 100


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from the global settings and the caller's environment."""
    for name in list(os.environ):
        if name.startswith("LOCAL_DEDUP_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory writing a file below tmp_path."""

    def _make(relative: str, content: bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def photo_tree(make_file: Callable[[str, bytes], Path], tmp_path: Path) -> Path:
    """Four 100 byte files: a, b and d share content, c differs."""
    make_file("a.jpg", CONTENT_X)
    make_file("b.jpg", CONTENT_X)
    make_file("c.jpg", CONTENT_Y)
    make_file("d.png", CONTENT_X)
    return tmp_path


@pytest.fixture
def scan_settings() -> Settings:
    """Settings scanning jpg and png files."""
    return Settings(
        extensions=["jpg", "png"],
        extension_sensitive=True,
        hash_workers=4,
        queue_size=16,
    )


def descriptor(path: str, size: int = 100) -> FileDescriptor:
    """Build a descriptor without touching the filesystem."""
    extension = file_extension(Path(path).name)
    return FileDescriptor(path=Path(path), size=size, extension=extension)


def drain(queue: asyncio.Queue) -> list:
    """Take everything currently queued."""
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items
