"""Custom exception hierarchy."""


class LocalDedupError(Exception):
    """Base exception for all local-dedup errors."""


class ScanError(LocalDedupError):
    """Error while walking the directory tree."""


class HashError(LocalDedupError):
    """Error reading a file's content for hashing."""


class DetectionError(LocalDedupError):
    """Error in the duplicate detection pipeline."""


class ConfigError(LocalDedupError):
    """Configuration error."""
