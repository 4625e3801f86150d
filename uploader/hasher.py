"""SHA-256 content digest calculation for upload integrity checks."""

import hashlib

from common.constants import HASH_BUFFER_SIZE
from common.logging_config import get_logger
from uploader.exceptions import HashError, IoError

logger = get_logger(__name__)


class IncrementalChecksumCalculator:
    """
    Calculate SHA-256 checksum incrementally for streaming data.

    Usage:
        calculator = IncrementalChecksumCalculator()
        calculator.update(buffer1)
        calculator.update(buffer2)
        digest = calculator.finalize()
    """

    def __init__(self):
        """Initialize a new incremental checksum calculator."""
        self._hasher = hashlib.sha256()
        self._finalized = False

    def update(self, data: bytes) -> None:
        """
        Update checksum with new data.

        Args:
            data: Bytes to add to checksum calculation

        Raises:
            HashError: If called after finalize()
        """
        if self._finalized:
            raise HashError("Cannot update after finalization")
        self._hasher.update(data)

    def finalize(self) -> str:
        """
        Finalize checksum calculation and return result.

        Returns:
            Lowercase hexadecimal SHA-256 digest
        """
        self._finalized = True
        return self._hasher.hexdigest()


def digest_file(path: str, buffer_size: int = HASH_BUFFER_SIZE) -> str:
    """
    Stream a file once, front to back, and return its SHA-256 digest.

    Args:
        path: File to hash
        buffer_size: Bytes read per iteration

    Returns:
        Lowercase hexadecimal digest of the whole file

    Raises:
        IoError: If the file cannot be opened or a read fails mid-stream
        HashError: If buffer_size is not positive
    """
    if buffer_size <= 0:
        raise HashError(f"Invalid hash buffer size: {buffer_size}")

    calculator = IncrementalChecksumCalculator()
    try:
        with open(path, 'rb') as f:
            while True:
                buffer = f.read(buffer_size)
                if not buffer:
                    break
                calculator.update(buffer)
    except OSError as e:
        raise IoError(f"Cannot read {path}: {e}") from e

    digest = calculator.finalize()
    logger.debug(f"Computed digest for {path}: {digest}")
    return digest
