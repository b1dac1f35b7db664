"""
ECS control-plane client.

Implements IControlPlanePort with boto3. The call is blocking; the
status classifier runs it in a worker thread and bounds the wait.
"""

from typing import Any, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from sigterm_capture.domain.errors import ControlPlaneFaultError
from sigterm_capture.domain.ports import IControlPlanePort
from sigterm_capture.domain.value_objects import TaskRecord
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class EcsControlPlaneClient(IControlPlanePort):
    """
    DescribeTasks adapter for the ECS control plane.
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[Any] = None,
    ):
        """
        Initialize ECS client.

        Args:
            region_name: AWS region, None to use the default chain
            timeout: Connect/read timeout in seconds
            client: Optional pre-built boto3 ECS client (tests)
        """
        if client is None:
            config = Config(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 2, "mode": "standard"},
            )
            client = boto3.client("ecs", region_name=region_name, config=config)
        self._client = client

    def describe_task(self, cluster: str, task_id: str) -> List[TaskRecord]:
        """
        Describe a single task.

        Implementation of IControlPlanePort.describe_task().

        Args:
            cluster: Cluster name
            task_id: Short task ID

        Returns:
            Task records (zero or one)

        Raises:
            ControlPlaneFaultError: Request failed, e.g. missing ecs:DescribeTasks permission
        """
        try:
            response = self._client.describe_tasks(cluster=cluster, tasks=[task_id])
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            raise ControlPlaneFaultError(
                f"DescribeTasks failed ({error_code}): {e}",
                original_error=e,
            ) from e
        except BotoCoreError as e:
            raise ControlPlaneFaultError(f"DescribeTasks failed: {e}", original_error=e) from e

        for failure in response.get("failures", []):
            logger.debug(
                "DescribeTasks reported failure",
                arn=failure.get("arn"),
                reason=failure.get("reason"),
            )

        return [
            TaskRecord(
                task_arn=task.get("taskArn", ""),
                last_status=task.get("lastStatus"),
                stopped_reason=task.get("stoppedReason"),
            )
            for task in response.get("tasks", [])
        ]
