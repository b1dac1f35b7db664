"""
Domain Services

Pure classification and parsing logic for the shutdown pipeline.
"""

import json
import re
from typing import Any, Iterable, List, Optional

from sigterm_capture.domain.value_objects import StopReason, TaskRecord, Verdict


TASK_ARN_ATTRIBUTE = "com.amazonaws.ecs.task-arn"
CLUSTER_ATTRIBUTE = "com.amazonaws.ecs.cluster"

# Signature ECS puts on stop reasons of service-initiated task replacement,
# e.g. "Scaling activity initiated by (deployment ecs-svc/1234567890)"
SCALING_ACTIVITY_REASON = "Scaling activity initiated"
DEFAULT_EXPECTED_STOP_REASONS = (SCALING_ACTIVITY_REASON,)

# Word characters, hyphen, colon and slash
_VALUE_CHARS = r"[\w\-:/]*"
_VALUE_RE = re.compile(_VALUE_CHARS)


class StopReasonRule:
    """
    Decides whether a stop reason describes an expected shutdown.

    A reason is valid when it contains any recognized substring
    (case-sensitive). Everything else is a failure signal.
    """

    def __init__(self, expected_reasons: Iterable[str] = DEFAULT_EXPECTED_STOP_REASONS):
        """
        Initialize the rule.

        Args:
            expected_reasons: Substrings marking an expected shutdown
        """
        self._expected_reasons = frozenset(r for r in expected_reasons if r)

    @property
    def expected_reasons(self) -> frozenset:
        return self._expected_reasons

    def is_valid(self, reason: StopReason) -> bool:
        """
        Check a stop reason against the recognized set.

        Args:
            reason: Stop reason reported by the control plane

        Returns:
            True if the shutdown is expected, False otherwise
        """
        return any(expected in reason.raw for expected in self._expected_reasons)

    def classify(self, tasks: List[TaskRecord]) -> Verdict:
        """
        Classify a describe-task reply.

        Args:
            tasks: Task records returned by the control plane

        Returns:
            EXPECTED when no task is returned or the first task stopped
            with a recognized reason, FAILURE otherwise
        """
        if not tasks:
            return Verdict.EXPECTED

        if self.is_valid(tasks[0].stop_reason):
            return Verdict.EXPECTED
        return Verdict.FAILURE


def task_id_from_arn(task_arn: str) -> str:
    """
    Extract the canonical short task ID from a task ARN.

    Handles both the long format (task/<cluster>/<id>) and the
    legacy format (task/<id>).

    Args:
        task_arn: Fully-qualified task resource name

    Returns:
        Segment after the last '/'
    """
    return task_arn.rsplit("/", 1)[-1]


def extract_attribute(document: str, attribute: str) -> Optional[str]:
    """
    Extract a string attribute from a metadata document.

    The document is decoded as JSON when possible and the whole tree is
    searched; the attribute may legitimately occur more than once, in
    which case the last occurrence wins. Documents that are not valid
    JSON are scanned with a permissive pattern instead.

    Only word characters, hyphen, colon and slash are accepted in a value.

    Args:
        document: Raw metadata document
        attribute: Attribute key to look for

    Returns:
        Attribute value, or None if not found
    """
    try:
        decoded = json.loads(document)
    except ValueError:
        return _match_attribute(document, attribute)

    values: List[str] = []
    _collect(decoded, attribute, values)
    accepted = [v for v in values if _VALUE_RE.fullmatch(v)]
    return accepted[-1] if accepted else None


def _collect(node: Any, attribute: str, values: List[str]) -> None:
    """Depth-first walk in document order, appending matching values."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == attribute and isinstance(value, str):
                values.append(value)
            _collect(value, attribute, values)
    elif isinstance(node, list):
        for item in node:
            _collect(item, attribute, values)


def _match_attribute(document: str, attribute: str) -> Optional[str]:
    # "<attribute>": "<value>"
    pattern = re.compile(r'"' + re.escape(attribute) + r'":\s*"(' + _VALUE_CHARS + r')"')
    matches = pattern.findall(document)
    return matches[-1] if matches else None
