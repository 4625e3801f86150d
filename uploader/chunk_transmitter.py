"""Transmission of a single file chunk as a multipart request."""

import httpx

from common.constants import CHUNK_PATH
from common.logging_config import get_logger
from uploader.exceptions import ChunkError

logger = get_logger(__name__)


class ChunkTransmitter:
    """Sends one chunk per call. Holds no state besides the HTTP client."""

    def __init__(self, http: httpx.Client):
        self.http = http

    def send(self, path: str, upload_id: str, chunk_index: int, chunk_size: int) -> None:
        """
        Read one chunk from the file and post it to the server.

        Each call opens its own read handle and seeks to its own offset, so
        concurrent calls never share a file position.

        Args:
            path: File being uploaded
            upload_id: Session id
            chunk_index: 1-based chunk number
            chunk_size: Server-declared chunk size

        Raises:
            ChunkError: On local read failure, transport failure or non-2xx response
        """
        offset = (chunk_index - 1) * chunk_size
        try:
            with open(path, 'rb') as f:
                f.seek(offset)
                data = f.read(chunk_size)
        except OSError as e:
            raise ChunkError(chunk_index, f"read failed: {e}") from e

        if not data:
            raise ChunkError(chunk_index, f"no data at offset {offset}")

        files = {'chunk': ('chunk', data, 'application/octet-stream')}
        form = {'uploadId': upload_id, 'chunkNumber': str(chunk_index)}

        try:
            response = self.http.post(CHUNK_PATH, data=form, files=files)
        except httpx.HTTPError as e:
            raise ChunkError(chunk_index, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise ChunkError(chunk_index, f"status {response.status_code}: {response.text}")

        logger.debug(f"Chunk {chunk_index} sent ({len(data)} bytes) [upload_id={upload_id}]")
