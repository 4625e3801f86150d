"""Command request data types for the uploader CLI."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadCommand:
    """Upload one file."""

    file_path: str
    config_path: Optional[str] = None
    debug: bool = False
    pause: bool = False
