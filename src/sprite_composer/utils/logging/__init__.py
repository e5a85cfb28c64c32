# ABOUTME: Logging configuration, progress tracking, and output formatting
# ABOUTME: Provides rich console output and structured logging for both pipelines

from .config import LoggingMode, configure_logging, get_logging_status
from .progress import SimpleProgressTracker, create_smart_progress
from .utils import (
    get_logger,
    log_api_call,
    log_pipeline_step,
    with_character_context,
    with_pipeline_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Progress
    "SimpleProgressTracker",
    "create_smart_progress",
    # Utilities
    "get_logger",
    "log_api_call",
    "log_pipeline_step",
    "with_character_context",
    "with_pipeline_context",
]
