"""Exception hierarchy for the chunked upload pipeline."""

from typing import Optional

from uploader.types import UploadState


class UploadError(Exception):
    """
    Base exception class for all upload errors.

    ``phase`` names the orchestrator state in which the error surfaced.
    """

    phase: Optional[UploadState] = None

    def __init__(self, message: str, phase: Optional[UploadState] = None):
        super().__init__(message)
        if phase is not None:
            self.phase = phase


class ConfigError(UploadError):
    """
    Raised when configuration values are missing or invalid.
    """
    pass


class IoError(UploadError):
    """
    Raised when the local file cannot be opened or read.
    """
    phase = UploadState.HASHING


class HashError(UploadError):
    """
    Raised when digest computation fails for a reason other than I/O.
    """
    phase = UploadState.HASHING


class SessionError(UploadError):
    """
    Raised when the server rejects the initiate call or cannot be reached.
    """
    phase = UploadState.SESSION_INITIATING

    def __init__(self, message: str, status_code: Optional[int] = None, server_message: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class ProtocolError(UploadError):
    """
    Raised when a server response is malformed or misses required fields.
    """
    pass


class ChunkError(UploadError):
    """
    Raised when a single chunk fails to transmit.
    """
    phase = UploadState.TRANSMITTING

    def __init__(self, chunk_index: int, cause: str):
        super().__init__(f"Chunk {chunk_index} failed: {cause}")
        self.chunk_index = chunk_index
        self.cause = cause


class FinalizeError(UploadError):
    """
    Raised when the server rejects finalize (e.g. missing chunks).
    """
    phase = UploadState.FINALIZING

    def __init__(self, server_message: str, status_code: Optional[int] = None):
        super().__init__(f"Finalization failed: {server_message}")
        self.server_message = server_message
        self.status_code = status_code
