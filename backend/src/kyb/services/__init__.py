"""
Services package - Validation pipeline and its execution resources.

Includes the validation orchestrator and the worker pool for blocking calls.
"""

from .blocking import BlockingExecutor
from .orchestrator import ValidationOrchestrator

__all__ = ["BlockingExecutor", "ValidationOrchestrator"]
