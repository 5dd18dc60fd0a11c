"""Tests for data models."""

from pathlib import Path

import pytest

from local_dedup.detector.models import (
    DuplicateGroup,
    FileDescriptor,
    ScanResult,
    Trait,
    file_extension,
)

from conftest import descriptor


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.JPG", "jpg"),
        ("archive.tar.gz", "gz"),
        ("README", ""),
        ("trailing.", ""),
        (".jpg", "jpg"),
    ],
)
def test_file_extension(name: str, expected: str) -> None:
    """Test extension is the lowercase suffix after the last dot."""
    assert file_extension(name) == expected


def test_trait_extension_sensitive() -> None:
    """Test extension participates in the trait when sensitive."""
    jpg = descriptor("/a.jpg")
    png = descriptor("/b.png")

    assert jpg.trait(True) == Trait(100, "jpg")
    assert jpg.trait(True) != png.trait(True)


def test_trait_extension_insensitive() -> None:
    """Test only size matters when extension is ignored."""
    jpg = descriptor("/a.jpg")
    png = descriptor("/b.png")

    assert jpg.trait(False) == Trait(100, None)
    assert jpg.trait(False) == png.trait(False)


def test_file_descriptor_from_path(tmp_path: Path) -> None:
    """Test descriptor is built from filesystem metadata."""
    path = tmp_path / "IMG_0001.NEF"
    path.write_bytes(b"\0" * 42)

    file = FileDescriptor.from_path(path)

    assert file.path == path.absolute()
    assert file.size == 42
    assert file.extension == "nef"
    assert file.name == "IMG_0001.NEF"


def test_file_descriptor_is_immutable() -> None:
    """Test descriptors cannot be modified once created."""
    file = descriptor("/a.jpg")

    with pytest.raises(AttributeError):
        file.size = 1  # type: ignore[misc]


def test_duplicate_group_sizes() -> None:
    """Test DuplicateGroup size calculations."""
    files = [descriptor(f"/test{i}.jpg", size=1024) for i in range(1, 4)]
    group = DuplicateGroup(group_id=1, digest=bytes(range(32)), files=files)

    assert group.count == 3
    assert group.size == 1024
    assert group.total_size == 3072  # 1024 * 3
    assert group.wasted_size == 2048  # 1024 * 2
    assert group.paths == [Path("/test1.jpg"), Path("/test2.jpg"), Path("/test3.jpg")]


def test_duplicate_group_hex_digest() -> None:
    """Test digest is rendered as lowercase hex."""
    group = DuplicateGroup(group_id=1, digest=b"\xab\x01" * 16, files=[])

    assert group.hex_digest == "ab01" * 16
    assert group.size == 0


def test_scan_result_totals() -> None:
    """Test ScanResult aggregates over its groups."""
    groups = [
        DuplicateGroup(1, b"\x01" * 32, [descriptor("/a.jpg", 10), descriptor("/b.jpg", 10)]),
        DuplicateGroup(
            2,
            b"\x02" * 32,
            [descriptor("/c.jpg", 5), descriptor("/d.jpg", 5), descriptor("/e.jpg", 5)],
        ),
    ]
    result = ScanResult(groups=groups, files_scanned=7, hash_requests=5)

    assert result.duplicate_files == 5
    assert result.wasted_size == 10 + 10
