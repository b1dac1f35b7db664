"""
Control Plane Port Interface

Defines the contract for querying the orchestrator for task status.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List

from sigterm_capture.domain.value_objects import TaskRecord


class IControlPlanePort(ABC):
    """
    Port interface for orchestrator control-plane queries.
    """

    @abstractmethod
    def describe_task(self, cluster: str, task_id: str) -> List[TaskRecord]:
        """
        Describe a single task.

        Blocking call; callers run it off the event loop.

        Args:
            cluster: Cluster name
            task_id: Short task ID

        Returns:
            Zero or one task records

        Raises:
            ControlPlaneFaultError: The query could not be completed
        """
        pass
