"""Command handler for the upload CLI."""

import os
from typing import Optional, TextIO

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.models import UploadCommand
from cli.utils import (
    ProgressPrinter,
    format_error,
    format_megabytes,
    format_result,
)
from uploader.chunk_transmitter import ChunkTransmitter
from uploader.exceptions import ChunkError, FinalizeError, UploadError
from uploader.orchestrator import UploadOrchestrator
from uploader.session_client import SessionClient
from uploader.transport import create_transport
from uploader.types import UploadState

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

PHASE_LABELS = {
    UploadState.HASHING: "hashing",
    UploadState.SESSION_INITIATING: "session initiation",
    UploadState.TRANSMITTING: "chunk upload",
    UploadState.FINALIZING: "finalization",
}


def describe_error(error: UploadError) -> str:
    """
    Build a user-facing message naming the failing phase.

    Args:
        error: Error raised by the orchestrator

    Returns:
        Message such as "Upload failed during chunk upload (chunk 3): ..."
    """
    phase = PHASE_LABELS.get(error.phase, "setup")
    if isinstance(error, ChunkError):
        return f"Upload failed during {phase} (chunk {error.chunk_index}): {error.cause}"
    if isinstance(error, FinalizeError):
        return f"Upload failed during {phase}: {error.server_message}"
    return f"Upload failed during {phase}: {error}"


def handle_upload(
    cmd: UploadCommand,
    config: Config,
    out: TextIO,
    transport: Optional[httpx.BaseTransport] = None
) -> int:
    """
    Run one upload and print its progress and result.

    Args:
        cmd: Parsed command
        config: Validated configuration
        out: Stream for user-facing output
        transport: Optional custom HTTP transport (used by tests)

    Returns:
        Process exit code
    """
    file_path = cmd.file_path
    if not os.path.isfile(file_path):
        out.write(format_error(f"Error: The file was not found: {file_path}") + "\n")
        return EXIT_FAILURE

    out.write(f"Preparing: {os.path.basename(file_path)}\n")
    out.write(f"Size: {format_megabytes(os.path.getsize(file_path))}\n")

    http = create_transport(
        config.get_base_url(),
        config.get_api_key(),
        timeout=config.get_timeout(),
        transport=transport,
    )
    try:
        orchestrator = UploadOrchestrator(
            SessionClient(http),
            ChunkTransmitter(http),
            concurrent_uploads=config.get_concurrent_uploads(),
            expiry=config.get_expiry(),
            on_progress=ProgressPrinter(out),
        )

        def announce(state: UploadState) -> None:
            if state == UploadState.HASHING:
                out.write("Calculate hash from file...\n")
            elif state == UploadState.SESSION_INITIATING:
                out.write(f"Hash: {orchestrator.digest}\n\nInitialize upload session...\n")
            elif state == UploadState.TRANSMITTING:
                session = orchestrator.session
                out.write(
                    f"Session started. Upload ID: {session.upload_id}, Chunks: {session.total_chunks}\n"
                    f"\nUpload {session.total_chunks} chunks with "
                    f"{config.get_concurrent_uploads()} simultaneous streams...\n"
                )
            elif state == UploadState.FINALIZING:
                out.write(
                    f"\nAll chunks uploaded in {orchestrator.transmit_seconds:.2f} seconds.\n"
                    "Finalize upload...\n"
                )
            out.flush()

        orchestrator.on_state_change = announce

        try:
            outcome = orchestrator.upload(file_path)
        except UploadError as e:
            out.write(format_error(f"\n{describe_error(e)}") + "\n")
            return EXIT_FAILURE
    finally:
        http.close()

    out.write(format_result(outcome.result) + "\n")
    logger.info(f"Upload finished in {outcome.elapsed_seconds:.2f}s: {outcome.result.download_link}")
    return EXIT_OK
