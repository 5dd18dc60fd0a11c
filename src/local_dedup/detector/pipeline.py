"""Concurrent duplicate detection pipeline."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from ..common.exceptions import ScanError
from ..common.logging import get_logger
from ..config.settings import Settings, get_settings
from ..scanner.file_scanner import FileScanner
from .aggregator import Aggregator
from .hasher import Hasher
from .messages import POISON_PILL, AggregatorMessage, GrouperMessage, HasherMessage, ScanFailure
from .models import ScanResult
from .trait_grouper import TraitGrouper

logger = get_logger(__name__)


class DetectionPipeline:
    """Orchestrates scanner, trait grouper, hasher and aggregator.

    Stages run as asyncio tasks connected by bounded queues. A full queue
    suspends the producer, and the hasher caps its outstanding reads, so a
    large tree cannot outrun hashing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize detection pipeline.

        Args:
            settings: Scan settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()

    def detect_duplicates(self, root: Path) -> ScanResult:
        """Run the pipeline to completion on a fresh event loop.

        Args:
            root: Directory to scan

        Returns:
            Scan result with duplicate groups

        Raises:
            ScanError: If the directory tree could not be walked
        """
        return asyncio.run(self.run(root))

    async def run(self, root: Path) -> ScanResult:
        """Run the pipeline inside the current event loop."""
        settings = self.settings
        logger.info(f"Scanning {root} for duplicates of files: {settings.extensions}")

        scanner = FileScanner(root, settings.extensions)
        grouper_queue: asyncio.Queue[GrouperMessage] = asyncio.Queue(settings.queue_size)
        hasher_queue: asyncio.Queue[HasherMessage] = asyncio.Queue(settings.queue_size)
        aggregator_queue: asyncio.Queue[AggregatorMessage] = asyncio.Queue(settings.queue_size)

        executor = ThreadPoolExecutor(
            max_workers=settings.hash_workers,
            thread_name_prefix="local-dedup-hash",
        )
        grouper = TraitGrouper(
            grouper_queue,
            hasher_queue,
            extension_sensitive=settings.extension_sensitive,
            progress_interval=settings.progress_interval,
        )
        hasher = Hasher(
            hasher_queue,
            aggregator_queue,
            executor,
            chunk_size=settings.chunk_size,
            max_in_flight=settings.max_in_flight,
        )
        aggregator = Aggregator(aggregator_queue)

        tasks = [
            asyncio.create_task(self._feed(scanner, grouper_queue), name="scanner"),
            asyncio.create_task(grouper.run(), name="trait-grouper"),
            asyncio.create_task(hasher.run(), name="hasher"),
            asyncio.create_task(aggregator.run(), name="aggregator"),
        ]

        try:
            *_, groups = await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            await hasher.cancel_pending()
            await asyncio.to_thread(executor.shutdown, wait=True, cancel_futures=True)

        return ScanResult(
            groups=groups,
            files_scanned=grouper.processed,
            hash_requests=grouper.hash_requests,
            hash_failures=hasher.failures,
        )

    async def _feed(
        self,
        scanner: FileScanner,
        queue: "asyncio.Queue[GrouperMessage]",
    ) -> None:
        """Push scanned files into the grouper, then a pill or a failure."""
        files = scanner.scan_files()

        while True:
            try:
                file = await asyncio.to_thread(next, files, None)
            except ScanError as e:
                await queue.put(ScanFailure(e))
                return

            if file is None:
                await queue.put(POISON_PILL)
                return

            await queue.put(file)
