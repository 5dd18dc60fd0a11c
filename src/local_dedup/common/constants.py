"""Constants used throughout the application."""

# Raw and JPEG image suffixes
DEFAULT_EXTENSIONS = ["jpg", "jpeg", "nef", "raf", "dng", "arw", "crw", "cr2", "cr3"]

# Hashing
CHUNK_SIZE = 64 * 1024
HASH_WORKERS = 8
MAX_IN_FLIGHT = 64

# Pipeline
QUEUE_SIZE = 1000
PROGRESS_INTERVAL = 100
