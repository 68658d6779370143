"""Application wiring."""

from .factory import Workspace, build_timer, build_workspace, create_gateway

__all__ = ["Workspace", "build_workspace", "build_timer", "create_gateway"]
