"""Stage 3: Group hashed files by digest and report duplicates."""

import asyncio

from ..common.exceptions import DetectionError, ScanError
from ..common.logging import get_logger
from .messages import POISON_PILL, AggregatorMessage, HashResult, ScanFailure
from .models import DuplicateGroup, FileDescriptor

logger = get_logger(__name__)


class Aggregator:
    """Collects hash results; the report is built once, on shutdown."""

    def __init__(self, inbox: "asyncio.Queue[AggregatorMessage]") -> None:
        """Initialize aggregator.

        Args:
            inbox: Queue fed by the hasher
        """
        self.inbox = inbox
        self.results: dict[bytes, list[FileDescriptor]] = {}

    async def run(self) -> list[DuplicateGroup]:
        """Consume results until the poison pill arrives.

        Returns:
            Duplicate groups in order of first digest arrival

        Raises:
            ScanError: If the scan failed upstream
        """
        while True:
            message = await self.inbox.get()

            if isinstance(message, HashResult):
                self.results.setdefault(message.digest, []).append(message.file)
            elif message is POISON_PILL:
                return self.report()
            elif isinstance(message, ScanFailure):
                raise ScanError(f"Scan aborted: {message.error}") from message.error
            else:
                raise DetectionError(f"Unexpected message for aggregator: {message!r}")

    def report(self) -> list[DuplicateGroup]:
        """Build and log the duplicate groups."""
        groups = [
            DuplicateGroup(group_id=group_id, digest=digest, files=list(files))
            for group_id, (digest, files) in enumerate(
                ((d, f) for d, f in self.results.items() if len(f) > 1),
                start=1,
            )
        ]

        total_files = sum(g.count for g in groups)
        logger.info(f"Found {len(groups)} conflicts, total of {total_files} files.")
        for group in groups:
            logger.info(f"Hash: {group.hex_digest}: {[str(p) for p in group.paths]}")

        return groups
