"""Data types shared by the upload pipeline (FileDescriptor, UploadSession, etc.)."""

import os
from dataclasses import dataclass
from enum import Enum


class UploadState(str, Enum):
    """Lifecycle states of one upload run."""

    IDLE = "idle"
    HASHING = "hashing"
    SESSION_INITIATING = "session_initiating"
    TRANSMITTING = "transmitting"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class FileDescriptor:
    """
    Local file metadata, read once at the start of an upload.
    """
    path: str
    size: int
    name: str

    @classmethod
    def from_path(cls, path: str) -> "FileDescriptor":
        """
        Build a descriptor from filesystem metadata.

        Args:
            path: Path to a regular file

        Returns:
            FileDescriptor for the file

        Raises:
            IoError: If the path is missing or is not a regular file
        """
        from uploader.exceptions import IoError

        if not os.path.exists(path):
            raise IoError(f"File not found: {path}")
        if not os.path.isfile(path):
            raise IoError(f"Not a file: {path}")
        try:
            size = os.path.getsize(path)
        except OSError as e:
            raise IoError(f"Cannot stat {path}: {e}") from e
        return cls(path=path, size=size, name=os.path.basename(path))


@dataclass(frozen=True)
class UploadSession:
    """
    Server-issued upload context.
    """
    upload_id: str
    chunk_size: int
    total_chunks: int

    @classmethod
    def for_file(cls, upload_id: str, chunk_size: int, file_size: int) -> "UploadSession":
        """Create a session, deriving the chunk count from the file size."""
        return cls(
            upload_id=upload_id,
            chunk_size=chunk_size,
            total_chunks=-(-file_size // chunk_size),
        )


@dataclass(frozen=True)
class ChunkRange:
    """
    Byte range of one planned chunk (index is 1-based).
    """
    index: int
    offset: int
    length: int


@dataclass(frozen=True)
class FinalizeResult:
    """
    Shareable artifact returned by the server after finalize.
    """
    file_name: str
    download_link: str
    delete_date: str


@dataclass(frozen=True)
class UploadOutcome:
    """Everything the caller needs to report a finished upload."""

    result: FinalizeResult
    session: UploadSession
    digest: str
    transmit_seconds: float
    elapsed_seconds: float
