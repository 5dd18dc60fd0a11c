"""Stage 2: Hash candidate files by content.

Reads run on a thread pool so many files can be read at once. At most
``max_in_flight`` reads are outstanding; at the limit the hasher stops
taking requests from its inbox, so a full inbox suspends the trait grouper
and, through it, the scanner.

Finished reads are posted to a private completions queue as a
``HashResult`` or ``HashFailure`` and handled on the hasher's run loop,
which keeps all state changes in one place.

The poison pill is only forwarded once every dispatched read has come
back. Forwarding it earlier would let the aggregator report before the
last results arrive and undercount duplicates.
"""

import asyncio
import hashlib
from concurrent.futures import Executor
from pathlib import Path
from typing import Callable, Optional, Union

from ..common.constants import CHUNK_SIZE, MAX_IN_FLIGHT
from ..common.exceptions import DetectionError, HashError
from ..common.logging import get_logger
from .messages import (
    POISON_PILL,
    AggregatorMessage,
    HasherMessage,
    HashFailure,
    HashRequest,
    HashResult,
    ScanFailure,
)
from .models import FileDescriptor

logger = get_logger(__name__)

HashFunction = Callable[[Path, int], bytes]
Completion = Union[HashResult, HashFailure]


def compute_digest(path: Path, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Compute the SHA-256 digest of a file, reading it in chunks.

    Args:
        path: File to read
        chunk_size: Bytes per read

    Returns:
        32-byte digest
    """
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.digest()


class Hasher:
    """Hashes requested files concurrently and drains before shutdown."""

    def __init__(
        self,
        inbox: "asyncio.Queue[HasherMessage]",
        downstream: "asyncio.Queue[AggregatorMessage]",
        executor: Executor,
        chunk_size: int = CHUNK_SIZE,
        max_in_flight: int = MAX_IN_FLIGHT,
        hash_file: Optional[HashFunction] = None,
    ) -> None:
        """Initialize hasher.

        Args:
            inbox: Queue fed by the trait grouper
            downstream: Aggregator queue
            executor: Pool running the blocking reads
            chunk_size: Bytes per read
            max_in_flight: Reads allowed to be outstanding at once
            hash_file: Function computing a file's digest (default: SHA-256)
        """
        self.inbox = inbox
        self.downstream = downstream
        self.executor = executor
        self.chunk_size = chunk_size
        self.max_in_flight = max_in_flight
        self.hash_file = hash_file or compute_digest
        self.in_flight = 0
        self.stopping = False
        self.shutdown_sent = False
        self.failures = 0
        self._tasks: set[asyncio.Task[None]] = set()
        # Holds at most max_in_flight messages, one per dispatched read
        self._completions: asyncio.Queue[Completion] = asyncio.Queue()

    async def run(self) -> None:
        """Consume the inbox until shutdown has been forwarded."""
        while not self.shutdown_sent:
            await self._collect(wait=self.in_flight >= self.max_in_flight)
            message = await self.inbox.get()

            if isinstance(message, HashRequest):
                self._dispatch(message.file)
            elif message is POISON_PILL:
                self.stopping = True
                while self.in_flight:
                    await self._collect(wait=True)
                self.shutdown_sent = True
                await self.downstream.put(POISON_PILL)
            elif isinstance(message, ScanFailure):
                await self._abort(message)
            else:
                raise DetectionError(f"Unexpected message for hasher: {message!r}")

    def _dispatch(self, file: FileDescriptor) -> None:
        self.in_flight += 1
        task = asyncio.create_task(self._hash(file))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _hash(self, file: FileDescriptor) -> None:
        loop = asyncio.get_running_loop()
        message: Completion
        try:
            digest = await loop.run_in_executor(self.executor, self._read_digest, file.path)
        except Exception as e:
            # Every dispatched read must report back or shutdown never drains
            message = HashFailure(file, e)
        else:
            message = HashResult(digest, file)
        self._completions.put_nowait(message)

    def _read_digest(self, path: Path) -> bytes:
        try:
            return self.hash_file(path, self.chunk_size)
        except OSError as e:
            raise HashError(str(e)) from e

    async def _collect(self, wait: bool) -> None:
        """Handle finished reads.

        With ``wait`` set, block until at least one read has finished.
        """
        if wait:
            await self._complete(await self._completions.get())
        while not self._completions.empty():
            await self._complete(self._completions.get_nowait())

    async def _complete(self, message: Completion) -> None:
        self.in_flight -= 1
        if isinstance(message, HashResult):
            await self.downstream.put(message)
        else:
            self.failures += 1
            logger.error(f"Skipping {message.file.path}: {message.error}")

    async def _abort(self, failure: ScanFailure) -> None:
        abandoned = await self.cancel_pending()
        if abandoned:
            logger.warning(f"Abandoned {abandoned} in-flight hashes after scan failure")

        self.shutdown_sent = True
        await self.downstream.put(failure)

    async def cancel_pending(self) -> int:
        """Cancel outstanding reads without waiting for their digests.

        Returns:
            Number of reads cancelled
        """
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        return len(pending)
