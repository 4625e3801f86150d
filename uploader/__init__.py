"""Chunked upload client: hashing, session negotiation, parallel chunk transfer."""

from uploader.chunk_transmitter import ChunkTransmitter
from uploader.orchestrator import UploadOrchestrator
from uploader.session_client import SessionClient
from uploader.transport import create_transport

__all__ = [
    "ChunkTransmitter",
    "SessionClient",
    "UploadOrchestrator",
    "create_transport",
]
