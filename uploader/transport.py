"""Construction of the shared HTTP transport handle."""

import uuid
from typing import Optional

import httpx

from common.constants import DEFAULT_TIMEOUT_SECONDS
from common.logging_config import get_logger

logger = get_logger(__name__)


def _attach_request_id(request: httpx.Request) -> None:
    """Tag every outgoing request with a fresh X-Request-ID."""
    request_id = str(uuid.uuid4())
    request.headers['X-Request-ID'] = request_id
    logger.debug(f"Making request: {request.method} {request.url.path} [request_id={request_id}]")


def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(
        f"Response received: {request.method} {request.url.path} status={response.status_code} "
        f"[request_id={request.headers.get('X-Request-ID')}]"
    )


def create_transport(
    base_url: str,
    api_key: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: Optional[httpx.BaseTransport] = None
) -> httpx.Client:
    """
    Create the HTTP client shared by the session client and chunk transmitter.

    The caller owns the returned client and must close it.

    Args:
        base_url: API base URL (trailing slashes are trimmed)
        api_key: Bearer token sent with every request
        timeout: Per-request timeout in seconds
        transport: Optional custom transport (used by tests)

    Returns:
        Configured httpx.Client
    """
    client = httpx.Client(
        base_url=base_url.rstrip('/'),
        headers={'Authorization': f'Bearer {api_key}'},
        timeout=timeout,
        transport=transport,
        event_hooks={'request': [_attach_request_id], 'response': [_log_response]},
    )
    logger.info(f"Initialized HTTP transport [base_url={client.base_url}, timeout={timeout}s]")
    return client
