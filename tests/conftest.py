"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import pytest

# Add project root and tests dir to path for imports
_tests_dir = Path(__file__).resolve().parent
for path in (_tests_dir.parent, _tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from helpers import CLUSTER, HOST_ID, TASK_ARN
from sigterm_capture.infrastructure.config import Settings


@pytest.fixture
def metadata_document() -> str:
    """Container metadata document as served by the ECS agent."""
    return json.dumps(
        {
            "DockerId": "43481a6ce4842eec8fe72fc28500c6b52edcc0917f105b83379f88cac1ff3946",
            "Name": "web",
            "DockerName": "ecs-web-1-web-8a8fd8dc98a7a2ad7d01",
            "Image": "web:latest",
            "Labels": {
                "com.amazonaws.ecs.cluster": CLUSTER,
                "com.amazonaws.ecs.container-name": "web",
                "com.amazonaws.ecs.task-arn": TASK_ARN,
                "com.amazonaws.ecs.task-definition-family": "web",
                "com.amazonaws.ecs.task-definition-version": "1",
            },
            "DesiredStatus": "RUNNING",
            "KnownStatus": "RUNNING",
            "Networks": [{"NetworkMode": "awsvpc", "IPv4Addresses": ["10.0.1.23"]}],
        }
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        metadata_uri="http://169.254.170.2/v4/abc",
        artifact_dir=str(tmp_path),
        host_id=HOST_ID,
        aws_region="us-east-1",
        describe_timeout=2.0,
        poll_interval=0.001,
        max_poll_interval=0.01,
        command_timeout=2.0,
        grace_period=5.0,
    )
