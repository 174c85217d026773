"""Database models for the workflow generation backend."""

from .logs import RunLog
from .workflow import Workflow

__all__ = ["Workflow", "RunLog"]
