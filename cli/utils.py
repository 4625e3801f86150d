"""Console output helpers for upload progress and results."""

import sys
import threading

from prompt_toolkit import prompt

from cli.constants import GREEN, PAUSE_PROMPT, RED, RESET, STYLE
from uploader.types import FinalizeResult


class ProgressPrinter:
    """Prints one line per completed chunk. Safe to call from worker threads."""

    def __init__(self, stream=None):
        """
        Initialize the progress printer.

        Args:
            stream: Output stream (defaults to stdout)
        """
        self.stream = stream or sys.stdout
        self._lock = threading.Lock()

    def __call__(self, completed: int, total: int) -> None:
        """
        Report a completed chunk.

        Args:
            completed: Number of chunks finished so far
            total: Number of chunks in the plan
        """
        percentage = completed / total * 100
        with self._lock:
            self.stream.write(f"Chunk {completed}/{total} ({GREEN}{percentage:.2f}%{RESET}) uploaded.\n")
            self.stream.flush()


def format_megabytes(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals (e.g., "10.00 MB")."""
    return f"{size_bytes / (1024.0 * 1024.0):.2f} MB"


def format_result(result: FinalizeResult) -> str:
    """Render the success block shown after finalize."""
    return (
        f"{GREEN}\n--- UPLOAD SUCCESSFUL ---\n"
        f"File name: {result.file_name}\n"
        f"Download link: {result.download_link}\n"
        f"Will be deleted on: {result.delete_date}\n"
        f"--------------------------{RESET}"
    )


def format_error(message: str) -> str:
    return f"{RED}{message}{RESET}"


def wait_for_acknowledgement() -> None:
    """Block until the user presses Enter (or closes input)."""
    try:
        prompt([("class:prompt", PAUSE_PROMPT)], style=STYLE)
    except (EOFError, KeyboardInterrupt):
        pass
