"""
Status Classifier

Queries the control plane for the task's stop reason and classifies
the shutdown as expected or failure.
"""

import asyncio
from typing import List, Optional

from sigterm_capture.domain.errors import ControlPlaneFaultError
from sigterm_capture.domain.ports import IControlPlanePort
from sigterm_capture.domain.services import StopReasonRule
from sigterm_capture.domain.value_objects import TaskIdentity, TaskRecord, Verdict
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class StatusClassifier:
    """
    Classifies the current shutdown using the control plane's stop reason.

    The describe request runs in a worker thread. Its completion is
    polled with a bounded exponential backoff until a deadline; a
    fault or an exceeded deadline yields INDETERMINATE.
    """

    def __init__(
        self,
        control_plane_port: IControlPlanePort,
        rule: Optional[StopReasonRule] = None,
        timeout: float = 10.0,
        poll_interval: float = 0.05,
        max_poll_interval: float = 1.0,
    ):
        """
        Initialize status classifier.

        Args:
            control_plane_port: Port for control-plane queries
            rule: Stop reason rule (default: scaling activity only)
            timeout: Deadline for the describe request in seconds
            poll_interval: Initial poll interval in seconds
            max_poll_interval: Upper bound for the poll interval
        """
        self._control_plane_port = control_plane_port
        self._rule = rule or StopReasonRule()
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._max_poll_interval = max_poll_interval

    async def classify(self, identity: Optional[TaskIdentity]) -> Verdict:
        """
        Classify the shutdown of the given task.

        Args:
            identity: Task identity, None when it could not be resolved

        Returns:
            EXPECTED, FAILURE, or INDETERMINATE
        """
        if identity is None:
            logger.info("Task identity not available, cannot classify shutdown")
            return Verdict.INDETERMINATE

        if not identity.is_complete:
            logger.warning("Task identity incomplete, cannot classify shutdown", **identity.to_dict())
            return Verdict.INDETERMINATE

        logger.info("Investigating task stop", task_id=identity.task_id, cluster=identity.cluster)

        try:
            tasks = await self._describe(identity)
        except ControlPlaneFaultError as e:
            # Most commonly the task role lacks ecs:DescribeTasks
            logger.warning(
                "Could not query task status from control plane",
                task_id=identity.task_id,
                error=e.message,
            )
            return Verdict.INDETERMINATE
        except asyncio.TimeoutError:
            logger.warning(
                "Control plane query timed out",
                task_id=identity.task_id,
                timeout_seconds=self._timeout,
            )
            return Verdict.INDETERMINATE
        except Exception as e:
            logger.error(
                "Unexpected error querying control plane",
                task_id=identity.task_id,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return Verdict.INDETERMINATE

        if not tasks:
            logger.info("Task not known to control plane", task_id=identity.task_id)
            return Verdict.EXPECTED

        task = tasks[0]
        verdict = self._rule.classify(tasks)

        logger.info(
            "Task stop classified",
            task_id=identity.task_id,
            last_status=task.last_status,
            stopped_reason=task.stopped_reason,
            verdict=verdict.value,
        )
        return verdict

    async def _describe(self, identity: TaskIdentity) -> List[TaskRecord]:
        """
        Issue the describe request and wait for it under the deadline.

        Raises:
            ControlPlaneFaultError: Request faulted
            asyncio.TimeoutError: Deadline exceeded
        """
        loop = asyncio.get_running_loop()
        request = asyncio.ensure_future(
            asyncio.to_thread(
                self._control_plane_port.describe_task,
                identity.cluster,
                identity.task_id,
            )
        )

        deadline = loop.time() + self._timeout
        interval = self._poll_interval
        attempt = 0

        while not request.done():
            remaining = deadline - loop.time()
            if remaining <= 0:
                request.cancel()
                raise asyncio.TimeoutError()

            await asyncio.wait({request}, timeout=min(interval, remaining))
            attempt += 1
            interval = min(interval * 2, self._max_poll_interval)

        logger.debug("Control plane request completed", polls=attempt)
        return request.result()
