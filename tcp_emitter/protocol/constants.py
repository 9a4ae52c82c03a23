"""Protocol-wide constants for the emitter wire format."""

DEFAULT_DELIMITER = "@@@"
ENCODING = "utf-8"
MAX_BUFFER_SIZE = 1024 * 1024  # 1 MiB bound for a single undelimited frame
READ_CHUNK_SIZE = 64 * 1024

__all__ = [
    "DEFAULT_DELIMITER",
    "ENCODING",
    "MAX_BUFFER_SIZE",
    "READ_CHUNK_SIZE",
]
