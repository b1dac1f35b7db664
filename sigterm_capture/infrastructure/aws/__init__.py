"""
AWS Infrastructure

Control-plane adapters.
"""

from .ecs_client import EcsControlPlaneClient

__all__ = ["EcsControlPlaneClient"]
