"""Project-wide constants (API routes, timeouts, buffer sizes)."""

INITIATE_PATH: str = "/api/v1/upload/initiate"
CHUNK_PATH: str = "/api/v1/upload/chunk"
FINALIZE_PATH: str = "/api/v1/upload/finalize"

DEFAULT_TIMEOUT_SECONDS: float = 2 * 60 * 60  # big files can take hours
DEFAULT_CONCURRENT_UPLOADS: int = 4
DEFAULT_EXPIRY: str = "1d"

HASH_BUFFER_SIZE: int = 1024 * 1024  # 1 MiB read buffer for hashing
