"""Upload session negotiation: initiate and finalize calls."""

import httpx
from pydantic import ValidationError

from common.constants import FINALIZE_PATH, INITIATE_PATH
from common.logging_config import get_logger
from uploader.exceptions import FinalizeError, ProtocolError, SessionError
from uploader.schemas import (
    FinalizeRequest,
    FinalizeResponse,
    InitiateRequest,
    InitiateResponse,
)
from uploader.types import FinalizeResult, UploadSession

logger = get_logger(__name__)


class SessionClient:
    """Opens and closes upload sessions. One attempt per call, no retries."""

    def __init__(self, http: httpx.Client):
        """
        Initialize session client.

        Args:
            http: Shared HTTP client (base URL and auth already configured)
        """
        self.http = http

    def initiate(self, name: str, size: int, digest: str, expiry: str) -> UploadSession:
        """
        Open an upload session for a file.

        Args:
            name: Display name of the file
            size: File size in bytes
            digest: SHA-256 hex digest of the file
            expiry: Server-side retention (e.g. "1d")

        Returns:
            UploadSession with upload id, chunk size and chunk count

        Raises:
            SessionError: On transport failure or non-2xx response
            ProtocolError: If the response body is malformed
        """
        payload = InitiateRequest(fileName=name, fileSize=size, fileHash=digest, expiry=expiry)
        logger.info(f"Initiating upload session for {name} ({size} bytes)")
        try:
            response = self.http.post(INITIATE_PATH, json=payload.model_dump())
        except httpx.HTTPError as e:
            raise SessionError(f"Cannot reach upload server: {e}") from e

        if not response.is_success:
            logger.warning(f"Initiate rejected: status={response.status_code}")
            raise SessionError(
                f"Initiate failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                server_message=response.text,
            )

        data = _parse(response, InitiateResponse, "initiate")
        session = UploadSession.for_file(data.uploadId, data.chunkSize, size)
        logger.info(
            f"Session started [upload_id={session.upload_id}, chunk_size={session.chunk_size}, "
            f"chunks={session.total_chunks}]"
        )
        return session

    def finalize(self, upload_id: str, total_chunks: int) -> FinalizeResult:
        """
        Ask the server to assemble and verify the uploaded chunks.

        Args:
            upload_id: Session id returned by initiate()
            total_chunks: Number of chunks that were sent

        Returns:
            FinalizeResult with file name, download link and deletion date

        Raises:
            FinalizeError: On transport failure or non-2xx response, carrying the server body
            ProtocolError: If a required field is missing from the response
        """
        payload = FinalizeRequest(uploadId=upload_id, totalChunks=total_chunks)
        logger.info(f"Finalizing upload [upload_id={upload_id}, chunks={total_chunks}]")
        try:
            response = self.http.post(FINALIZE_PATH, json=payload.model_dump())
        except httpx.HTTPError as e:
            raise FinalizeError(str(e)) from e

        if not response.is_success:
            logger.warning(f"Finalize rejected: status={response.status_code}")
            raise FinalizeError(response.text, status_code=response.status_code)

        data = _parse(response, FinalizeResponse, "finalize")
        return FinalizeResult(
            file_name=data.fileName,
            download_link=data.link,
            delete_date=data.deleteDate,
        )


def _parse(response: httpx.Response, model, operation: str):
    """Validate a JSON response body against a schema."""
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        # ValidationError subclasses ValueError, as does JSONDecodeError
        kind = "invalid" if isinstance(e, ValidationError) else "non-JSON"
        raise ProtocolError(f"Malformed {operation} response ({kind}): {e}") from e
