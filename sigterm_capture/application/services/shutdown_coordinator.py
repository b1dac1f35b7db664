"""
Shutdown Coordinator

Drives the termination pipeline when the container is asked to stop:
resolve task identity, classify the stop, capture diagnostics on
failure, then release process exit.
"""

import asyncio
import signal
from typing import Iterable, Optional, Set

from sigterm_capture.application.services.diagnostic_capturer import DiagnosticCapturer
from sigterm_capture.application.services.metadata_resolver import MetadataResolver
from sigterm_capture.application.services.status_classifier import StatusClassifier
from sigterm_capture.domain.ports import IArtifactStorePort
from sigterm_capture.domain.value_objects import ShutdownState, Verdict
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class ShutdownCoordinator:
    """
    Coordinates the termination-triggered classification and capture.

    States: running -> notified -> classifying -> (capturing) ->
    draining -> exited. The exited state is reached exactly once, even
    if a step raises or the grace period runs out.
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        classifier: StatusClassifier,
        capturer: DiagnosticCapturer,
        artifact_store: IArtifactStorePort,
        grace_period: float = 25.0,
    ):
        """
        Initialize shutdown coordinator.

        Args:
            resolver: Task identity resolver
            classifier: Stop reason classifier
            capturer: Diagnostic capturer
            artifact_store: Store for captured artifacts
            grace_period: Time limit for the whole pipeline in seconds
        """
        self._resolver = resolver
        self._classifier = classifier
        self._capturer = capturer
        self._artifact_store = artifact_store
        self._grace_period = grace_period

        self._state = ShutdownState.RUNNING
        self._verdict: Optional[Verdict] = None
        self._is_shutting_down = False
        self._shutdown_complete = asyncio.Event()

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def verdict(self) -> Optional[Verdict]:
        return self._verdict

    @property
    def grace_period(self) -> float:
        return self._grace_period

    def is_shutting_down(self) -> bool:
        """
        Check if shutdown handling has begun.

        Reported by the health endpoint.
        """
        return self._is_shutting_down

    async def shutdown(self, signum: Optional[int] = None) -> Optional[Verdict]:
        """
        Handle a termination notification.

        Args:
            signum: Signal number, if the notification came from a signal

        Returns:
            The verdict; a call made while shutdown is already in progress
            waits for that run and returns its verdict
        """
        if self._is_shutting_down:
            logger.debug("Shutdown already in progress, waiting for completion")
            await self._shutdown_complete.wait()
            return self._verdict

        self._is_shutting_down = True
        self._transition(ShutdownState.NOTIFIED)
        logger.info("Termination notification received", signal=signum)

        verdict = Verdict.INDETERMINATE
        try:
            verdict = await self._run_pipeline()
        except Exception as e:
            logger.error(
                "Shutdown pipeline failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
        finally:
            self._verdict = verdict
            self._finish()

        return verdict

    async def run_with_grace_period(self, signum: Optional[int] = None) -> Optional[Verdict]:
        """
        Run shutdown bounded by the grace period.

        On timeout the pipeline is cancelled and the coordinator is
        released anyway.

        Args:
            signum: Signal number, if any

        Returns:
            The verdict, or None on timeout
        """
        try:
            return await asyncio.wait_for(self.shutdown(signum), timeout=self._grace_period)
        except asyncio.TimeoutError:
            logger.error(
                "Shutdown pipeline exceeded grace period",
                grace_period_seconds=self._grace_period,
                state=self._state.value,
            )
            self._finish()
            return None

    async def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the shutdown sequence to complete.

        Args:
            timeout: Maximum wait in seconds, None to wait indefinitely

        Returns:
            True if completed, False on timeout
        """
        try:
            await asyncio.wait_for(self._shutdown_complete.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def _run_pipeline(self) -> Verdict:
        self._transition(ShutdownState.CLASSIFYING)

        identity = await self._resolver.resolve()
        verdict = await self._classifier.classify(identity)

        if verdict is not Verdict.FAILURE:
            logger.info("Normal container stop event. No action required.", verdict=verdict.value)
            return verdict

        self._transition(ShutdownState.CAPTURING)
        logger.warning(
            "Container failure detected",
            task_id=identity.task_id if identity else None,
        )

        artifacts = await self._capturer.capture()
        saved = 0
        for artifact in artifacts:
            try:
                if await self._artifact_store.save(artifact):
                    saved += 1
            except Exception as e:
                logger.error("Failed to store artifact", artifact=artifact.name, error=str(e))

        logger.info("Diagnostics captured", captured=len(artifacts), saved=saved)
        return verdict

    def _finish(self) -> None:
        if self._state is ShutdownState.EXITED:
            return

        self._transition(ShutdownState.DRAINING)
        self._transition(ShutdownState.EXITED)
        self._shutdown_complete.set()

        logger.info(
            "Shutdown complete",
            verdict=self._verdict.value if self._verdict else None,
        )

    def _transition(self, state: ShutdownState) -> None:
        logger.debug("Shutdown state changed", previous=self._state.value, state=state.value)
        self._state = state


# Strong references to signal-triggered shutdown tasks
_signal_tasks: Set[asyncio.Task] = set()


def register_signal_handlers(
    coordinator: ShutdownCoordinator,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    signals: Iterable[int] = (signal.SIGTERM, signal.SIGINT),
) -> None:
    """
    Register loop signal handlers that run the shutdown pipeline.

    For hosts not served by uvicorn, which otherwise owns SIGTERM/SIGINT
    and triggers the lifespan shutdown instead.

    Args:
        coordinator: Coordinator to notify
        loop: Event loop (default: running loop)
        signals: Signals to handle
    """
    loop = loop or asyncio.get_running_loop()

    def signal_handler(signum: int) -> None:
        logger.info("Shutdown signal received", signal=signum)
        task = loop.create_task(coordinator.run_with_grace_period(signum))
        _signal_tasks.add(task)
        task.add_done_callback(_signal_tasks.discard)

    for signum in signals:
        loop.add_signal_handler(signum, signal_handler, signum)
        logger.debug("Signal handler registered", signal=signum)
