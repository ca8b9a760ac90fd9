"""OCR execution service.

Turns one ``extractText`` request into exactly one outcome:

    validate -> check file -> acquire access -> recognize -> aggregate

Request-level failures are returned as :class:`OCRFailure` values, never
raised. Recognition may complete on another thread; the outcome is always
delivered back on the event loop that awaited it.
"""

import asyncio
import logging
import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from .access import DescriptorGrant, FileAccessGrant, NullGrant, scoped_access
from .errors import ErrorCode, PlatformChannelError
from .models import (
    IMAGE_NOT_FOUND,
    OCRFailure,
    OCROutcome,
    OCRRequest,
    OCRResponse,
    TextObservation,
    aggregate_observations,
)

logger = logging.getLogger(__name__)

GrantFactory = Callable[[str], FileAccessGrant]
Completion = Callable[[Optional[List[TextObservation]], Optional[BaseException]], None]


def vision_failure(error: BaseException) -> OCRFailure:
    """Translate a recognition error into a ``vision_error`` failure."""
    message = str(error) or error.__class__.__name__
    return OCRFailure(code=ErrorCode.VISION_ERROR, message=message)


class OCRExecutionService:
    """Validates requests and runs them through a recognition engine."""

    platform = "generic"

    def __init__(self, engine, grant_factory: Optional[GrantFactory] = None):
        """Initialize service.

        Args:
            engine: Recognition engine with a ``submit(path, completion)`` method
            grant_factory: Builds the file access grant for a path
        """
        self.engine = engine
        self.grant_factory = grant_factory or NullGrant

    async def extract_text(self, arguments: Any) -> OCROutcome:
        """Extract text from the image named in ``arguments``.

        Args:
            arguments: Raw channel arguments, expected ``{"imagePath": str}``

        Returns:
            OCRResponse on success, OCRFailure otherwise
        """
        try:
            request = OCRRequest.from_arguments(arguments)
        except PlatformChannelError as e:
            logger.warning(f"Rejected extractText call: {e.message}")
            return OCRFailure.from_error(e)

        if not os.path.isfile(request.image_path):
            logger.warning(f"Image not found: {request.image_path}")
            return OCRFailure(
                code=ErrorCode.NOT_FOUND,
                message=IMAGE_NOT_FOUND,
                details=request.image_path
            )

        loop = asyncio.get_running_loop()
        future = loop.create_future()
        started = time.perf_counter()

        def resolve(outcome: OCROutcome) -> None:
            # Late or duplicate completions, or a cancelled caller
            if not future.done():
                future.set_result(outcome)

        def completion(observations, error) -> None:
            if error is not None:
                outcome = vision_failure(error)
            else:
                outcome = OCRResponse(text=aggregate_observations(observations or []))
            loop.call_soon_threadsafe(resolve, outcome)

        logger.debug(f"Recognizing {request.image_path} ({self.platform})")
        try:
            self._dispatch(request, completion)
        except Exception as e:
            logger.warning(f"Could not dispatch recognition for {request.image_path}: {e}")
            resolve(vision_failure(e))

        outcome = await future
        elapsed = time.perf_counter() - started
        if isinstance(outcome, OCRResponse):
            logger.info(f"Recognized {len(outcome.lines)} lines from {request.image_path} in {elapsed:.2f}s")
        else:
            logger.warning(f"Recognition failed for {request.image_path}: {outcome.message}")
        return outcome

    def _dispatch(self, request: OCRRequest, completion: Completion) -> None:
        """Start recognition; the result must reach ``completion``."""
        self._perform(request, completion)

    def _perform(self, request: OCRRequest, completion: Completion) -> None:
        # Runs on a worker thread for the desktop variant; nothing may escape
        try:
            grant = self.grant_factory(request.image_path)
            with scoped_access(grant):
                self.engine.submit(request.image_path, completion)
        except Exception as e:
            completion(None, e)

    def close(self, wait: bool = True) -> None:
        pass


class InlineOCRService(OCRExecutionService):
    """Variant for mobile hosts.

    Recognition runs on the calling thread; the result still arrives through
    the engine's completion.
    """

    platform = "mobile"


class BackgroundOCRService(OCRExecutionService):
    """Variant for desktop hosts.

    Each request is dispatched to a worker pool and holds a scoped access
    grant on its image while the engine reads it.
    """

    platform = "desktop"

    def __init__(self, engine, grant_factory: Optional[GrantFactory] = None,
                 executor: Optional[Executor] = None, max_workers: int = 4):
        super().__init__(engine, grant_factory or DescriptorGrant)
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="ocr-bridge"
        )

    def _dispatch(self, request: OCRRequest, completion: Completion) -> None:
        self.executor.submit(self._perform, request, completion)

    def close(self, wait: bool = True) -> None:
        """Shut down the worker pool, by default waiting for running requests."""
        if self._owns_executor:
            self.executor.shutdown(wait=wait)
