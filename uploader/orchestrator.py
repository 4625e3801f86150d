"""Coordinator for a chunked upload: hash, initiate, transmit, finalize."""

import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from common.constants import DEFAULT_CONCURRENT_UPLOADS, DEFAULT_EXPIRY
from common.logging_config import get_logger
from uploader.chunk_plan import build_chunk_plan
from uploader.chunk_transmitter import ChunkTransmitter
from uploader.exceptions import ChunkError, UploadError
from uploader.hasher import digest_file
from uploader.progress import ProgressCounter
from uploader.session_client import SessionClient
from uploader.types import (
    ChunkRange,
    FileDescriptor,
    UploadOutcome,
    UploadSession,
    UploadState,
)

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


class UploadOrchestrator:
    """
    Drives one upload through Hashing, SessionInitiating, Transmitting and
    Finalizing. Phases never overlap; any error moves the run to FAILED.
    """

    def __init__(
        self,
        session_client: SessionClient,
        transmitter: ChunkTransmitter,
        concurrent_uploads: int = DEFAULT_CONCURRENT_UPLOADS,
        expiry: str = DEFAULT_EXPIRY,
        on_progress: Optional[ProgressCallback] = None,
        on_state_change: Optional[Callable[[UploadState], None]] = None
    ):
        """
        Initialize orchestrator.

        Args:
            session_client: Client for initiate/finalize calls
            transmitter: Sender for individual chunks
            concurrent_uploads: Worker pool size (>= 1)
            expiry: Retention requested from the server
            on_progress: Called with (completed, total) after each successful chunk
            on_state_change: Called with the new state on every transition
        """
        if concurrent_uploads < 1:
            raise ValueError(f"concurrent_uploads must be >= 1, got {concurrent_uploads}")
        self.session_client = session_client
        self.transmitter = transmitter
        self.concurrent_uploads = concurrent_uploads
        self.expiry = expiry
        self.on_progress = on_progress
        self.on_state_change = on_state_change
        self.state = UploadState.IDLE
        self.error: Optional[Exception] = None
        self.progress: Optional[ProgressCounter] = None
        self.digest: Optional[str] = None
        self.session: Optional[UploadSession] = None
        self.transmit_seconds: Optional[float] = None

    def _transition(self, state: UploadState) -> None:
        logger.info(f"Upload state: {self.state.value} -> {state.value}")
        self.state = state
        if self.on_state_change:
            self.on_state_change(state)

    def upload(self, path: str) -> UploadOutcome:
        """
        Upload a file end to end.

        Args:
            path: Path to an existing regular file

        Returns:
            UploadOutcome with the server's finalize result and timings

        Raises:
            UploadError: Subclass identifying the failing phase
            Exception: Any other failure, after moving the run to FAILED
        """
        if self.state != UploadState.IDLE:
            raise RuntimeError(f"Orchestrator already used (state={self.state.value})")

        started = time.monotonic()
        try:
            self._transition(UploadState.HASHING)
            descriptor = FileDescriptor.from_path(path)
            digest = self.digest = digest_file(descriptor.path)

            self._transition(UploadState.SESSION_INITIATING)
            session = self.session = self.session_client.initiate(
                descriptor.name, descriptor.size, digest, self.expiry
            )

            self._transition(UploadState.TRANSMITTING)
            transmit_started = time.monotonic()
            self._transmit(descriptor, session)
            transmit_seconds = self.transmit_seconds = time.monotonic() - transmit_started

            self._transition(UploadState.FINALIZING)
            result = self.session_client.finalize(session.upload_id, session.total_chunks)
        except UploadError as e:
            e.phase = self.state
            self.error = e
            logger.error(f"Upload failed during {self.state.value}: {e}")
            self._transition(UploadState.FAILED)
            raise
        except Exception as e:
            self.error = e
            logger.error(f"Upload aborted during {self.state.value}: {e}", exc_info=True)
            self._transition(UploadState.FAILED)
            raise

        self._transition(UploadState.DONE)
        return UploadOutcome(
            result=result,
            session=session,
            digest=digest,
            transmit_seconds=transmit_seconds,
            elapsed_seconds=time.monotonic() - started,
        )

    def _transmit(self, descriptor: FileDescriptor, session: UploadSession) -> None:
        """
        Send every planned chunk with at most ``concurrent_uploads`` in flight.

        On the first failure no further chunks are started; chunks already in
        flight finish, then the first error is raised.
        """
        plan = build_chunk_plan(descriptor.size, session.chunk_size)
        self.progress = ProgressCounter(len(plan))
        if not plan:
            return

        work: "queue.Queue[ChunkRange]" = queue.Queue()
        for chunk in plan:
            work.put(chunk)

        stop = threading.Event()
        errors: List[Exception] = []
        errors_lock = threading.Lock()

        def worker() -> None:
            while not stop.is_set():
                try:
                    chunk = work.get_nowait()
                except queue.Empty:
                    return
                try:
                    self.transmitter.send(
                        descriptor.path, session.upload_id, chunk.index, session.chunk_size
                    )
                except ChunkError as e:
                    self._record_failure(e, stop, errors, errors_lock)
                    return
                except Exception as e:
                    self._record_failure(ChunkError(chunk.index, str(e)), stop, errors, errors_lock)
                    return
                try:
                    completed = self.progress.increment(self.on_progress)
                except Exception as e:
                    self._record_failure(e, stop, errors, errors_lock)
                    return
                logger.debug(f"Chunk {chunk.index} done ({completed}/{len(plan)})")

        pool_size = min(self.concurrent_uploads, len(plan))
        logger.info(f"Uploading {len(plan)} chunks with {pool_size} workers")
        with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="chunk") as executor:
            futures = [executor.submit(worker) for _ in range(pool_size)]
        for future in futures:
            future.result()

        if errors:
            raise errors[0]

    @staticmethod
    def _record_failure(
        error: Exception,
        stop: threading.Event,
        errors: List[Exception],
        lock: threading.Lock
    ) -> None:
        with lock:
            errors.append(error)
        stop.set()
        if isinstance(error, ChunkError):
            logger.error(f"Chunk {error.chunk_index} failed, stopping dispatch: {error.cause}")
        else:
            logger.error(f"Progress reporting failed, stopping dispatch: {error}")
