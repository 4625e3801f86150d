"""Shared pytest fixtures for all tests."""

import json
import logging
import threading

import httpx
import pytest

from cli.config import Config
from common.logging_config import SensitiveDataFilter

MIB = 1024 * 1024


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in ('FILESHARER_CONFIG', 'FILESHARER_BASE_URL', 'FILESHARER_API_KEY', 'LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they never outlive a captured stdout."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            root.removeHandler(handler)


@pytest.fixture
def make_file(tmp_path):
    """
    Factory creating a file of the given size with position-dependent content.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Callable (size, name='upload.bin') -> Path
    """
    def _make(size: int, name: str = 'upload.bin'):
        pattern = bytes(range(256))
        data = (pattern * (size // 256 + 1))[:size]
        file_path = tmp_path / name
        file_path.write_bytes(data)
        return file_path

    return _make


@pytest.fixture
def sample_file(make_file):
    """A 1000-byte file."""
    return make_file(1000, 'sample.bin')


@pytest.fixture
def temp_config(tmp_path):
    """
    Create a valid Config backed by a temporary appsettings.json.

    Returns:
        Config instance
    """
    config_path = tmp_path / 'appsettings.json'
    config_path.write_text(json.dumps({
        'base_url': 'http://test/',
        'api_key': 'secret-key',
        'concurrent_uploads': 2,
    }))
    return Config(config_path)


def parse_multipart(request: httpx.Request) -> dict:
    """
    Split a multipart/form-data request body into {field name: raw bytes}.
    """
    content_type = request.headers['content-type']
    boundary = content_type.split('boundary=', 1)[1].encode()
    fields = {}
    for part in request.content.split(b'--' + boundary):
        if not part.strip(b'\r\n') or part.strip() == b'--':
            continue
        head, _, body = part.lstrip(b'\r\n').partition(b'\r\n\r\n')
        name = head.split(b'name="', 1)[1].split(b'"', 1)[0].decode()
        fields[name] = body[:-2] if body.endswith(b'\r\n') else body
    return fields


class FakeUploadServer:
    """In-memory upload API used behind httpx.MockTransport."""

    def __init__(self, chunk_size: int, upload_id: str = 'upload-123'):
        self.chunk_size = chunk_size
        self.upload_id = upload_id
        self.initiate_requests = []
        self.finalize_requests = []
        self.chunks = {}
        self.chunk_attempts = []
        self.fail_chunks = set()
        self.finalize_status = 200
        self.finalize_body = {
            'fileName': 'upload.bin',
            'link': 'https://share.example.com/d/abc',
            'deleteDate': '2026-10-20T12:00:00Z',
        }
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == '/api/v1/upload/initiate':
            self.initiate_requests.append(json.loads(request.content))
            return httpx.Response(200, json={'uploadId': self.upload_id, 'chunkSize': self.chunk_size})

        if request.url.path == '/api/v1/upload/chunk':
            fields = parse_multipart(request)
            index = int(fields['chunkNumber'])
            with self._lock:
                self.chunk_attempts.append(index)
            if index in self.fail_chunks:
                return httpx.Response(500, text='chunk store failed')
            with self._lock:
                self.chunks[index] = fields['chunk']
            return httpx.Response(200)

        if request.url.path == '/api/v1/upload/finalize':
            self.finalize_requests.append(json.loads(request.content))
            if self.finalize_status != 200:
                return httpx.Response(self.finalize_status, text='Missing chunks: 2')
            return httpx.Response(200, json=self.finalize_body)

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def assembled(self) -> bytes:
        return b''.join(self.chunks[i] for i in sorted(self.chunks))
