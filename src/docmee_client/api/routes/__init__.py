"""API routes."""

from . import operate_log, ppt

__all__ = ["operate_log", "ppt"]
