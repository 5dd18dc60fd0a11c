"""Stage 1: Group files by trait and request hashes on collisions."""

import asyncio

from ..common.exceptions import DetectionError
from ..common.logging import get_logger
from .messages import POISON_PILL, GrouperMessage, HasherMessage, HashRequest, ScanFailure
from .models import FileDescriptor, Trait

logger = get_logger(__name__)


class TraitGrouper:
    """Buckets scanned files by trait.

    A file is only sent for hashing once another file with the same trait
    has been seen. On the first collision both files are requested, since
    the earlier one was not hashed while it looked unique.
    """

    def __init__(
        self,
        inbox: "asyncio.Queue[GrouperMessage]",
        downstream: "asyncio.Queue[HasherMessage]",
        extension_sensitive: bool = True,
        progress_interval: int = 100,
    ) -> None:
        """Initialize trait grouper.

        Args:
            inbox: Queue fed by the scanner
            downstream: Hasher queue
            extension_sensitive: Include the extension in the trait
            progress_interval: Log progress every N files
        """
        self.inbox = inbox
        self.downstream = downstream
        self.extension_sensitive = extension_sensitive
        self.progress_interval = progress_interval
        self.seen: dict[Trait, list[FileDescriptor]] = {}
        self.processed = 0
        self.hash_requests = 0

    async def run(self) -> None:
        """Consume the inbox until a poison pill or scan failure arrives."""
        while True:
            message = await self.inbox.get()

            if message is POISON_PILL:
                await self.downstream.put(POISON_PILL)
                logger.info(f"Finished searching, scanned {self.processed} files.")
                return

            if isinstance(message, ScanFailure):
                logger.error(f"Failure, exiting. {message.error}")
                await self.downstream.put(message)
                return

            if not isinstance(message, FileDescriptor):
                raise DetectionError(f"Unexpected message for trait grouper: {message!r}")

            await self._handle_file(message)

    async def _handle_file(self, file: FileDescriptor) -> None:
        trait = file.trait(self.extension_sensitive)
        peers = self.seen.get(trait)

        if peers is None:
            self.seen[trait] = [file]
        else:
            peers.append(file)
            # First collision: the earlier file was never requested
            to_hash = peers if len(peers) == 2 else [file]
            for candidate in to_hash:
                await self.downstream.put(HashRequest(candidate))
                self.hash_requests += 1

        self.processed += 1
        if self.processed % self.progress_interval == 0:
            logger.info(f"Processed {self.processed} files")
