"""Messages exchanged between pipeline stages."""

from dataclasses import dataclass
from typing import Final, Union

from .models import FileDescriptor


class _PoisonPill:
    """End of input; each stage forwards it once its own work has drained."""

    def __repr__(self) -> str:
        return "POISON_PILL"


POISON_PILL: Final = _PoisonPill()


@dataclass(frozen=True)
class ScanFailure:
    """Directory traversal failed; stages stop without finishing their work."""

    error: BaseException


@dataclass(frozen=True)
class HashRequest:
    file: FileDescriptor


@dataclass(frozen=True)
class HashResult:
    digest: bytes
    file: FileDescriptor


@dataclass(frozen=True)
class HashFailure:
    file: FileDescriptor
    error: BaseException


GrouperMessage = Union[FileDescriptor, ScanFailure, _PoisonPill]
HasherMessage = Union[HashRequest, ScanFailure, _PoisonPill]
AggregatorMessage = Union[HashResult, ScanFailure, _PoisonPill]
