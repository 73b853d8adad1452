"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy shared by every component
    - clock.py: Wall-clock helpers

Usage:
    from creal.core import get_logger, StoreUnavailable
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_operation_id,
    reset_operation_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    CRealError,
    InfrastructureError,
    PipelineError,
    StoreUnavailable,
    SchemaVersionMismatch,
    ConfigurationError,
    RemoteAnalysisFailed,
    AuthorLookupFailed,
    VideoGenerationError,
    StartFailed,
    OperationFailed,
    OperationTimedOut,
    ResultUnresolvable,
    UnsupportedLocatorScheme,
    DownloadFailed,
)

# Clock
from .clock import Clock, system_clock

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_operation_id",
    "reset_operation_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "CRealError",
    "InfrastructureError",
    "PipelineError",
    "StoreUnavailable",
    "SchemaVersionMismatch",
    "ConfigurationError",
    "RemoteAnalysisFailed",
    "AuthorLookupFailed",
    "VideoGenerationError",
    "StartFailed",
    "OperationFailed",
    "OperationTimedOut",
    "ResultUnresolvable",
    "UnsupportedLocatorScheme",
    "DownloadFailed",
    # Clock
    "Clock",
    "system_clock",
]
