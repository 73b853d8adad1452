"""
Core Exceptions
Standardized base exceptions for the service.

Every failure a caller can see maps to exactly one class here so the message
router can report stage-specific errors.
"""

from typing import Optional


class CRealError(Exception):
    """Base exception for all service errors."""
    pass


class InfrastructureError(CRealError):
    """Base exception for infrastructure errors (storage, configuration)."""
    pass


class PipelineError(CRealError):
    """Base exception for remote processing errors."""
    pass


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

class StoreUnavailable(InfrastructureError):
    """The key-value substrate behind the cache errored."""
    pass


class SchemaVersionMismatch(InfrastructureError):
    """A persisted envelope has an unexpected schema version.

    Raised and absorbed inside the cache store; never reaches callers.
    """

    def __init__(self, found: Optional[int], expected: int):
        super().__init__(f"Storage schema version {found!r} does not match expected {expected}")
        self.found = found
        self.expected = expected


class ConfigurationError(InfrastructureError):
    """Required configuration (e.g. an API key) is missing."""
    pass


# ---------------------------------------------------------------------------
# Remote pipelines
# ---------------------------------------------------------------------------

class RemoteAnalysisFailed(PipelineError):
    """The external analysis function errored."""
    pass


class AuthorLookupFailed(PipelineError):
    """Author profile lookup failed on every configured model."""
    pass


class VideoGenerationError(PipelineError):
    """Base class for failures in the video synthesis pipeline."""
    pass


class StartFailed(VideoGenerationError):
    """The initiating call did not return a usable operation handle."""
    pass


class OperationFailed(VideoGenerationError):
    """The remote reported an explicit error while polling."""
    pass


class OperationTimedOut(VideoGenerationError):
    """The poll attempt budget was exhausted before the operation finished."""
    pass


class ResultUnresolvable(VideoGenerationError):
    """The operation finished but no locator could be found in its response."""
    pass


class UnsupportedLocatorScheme(VideoGenerationError):
    """The locator uses a scheme that cannot be fetched directly (e.g. gs://)."""

    def __init__(self, locator: str):
        super().__init__(
            f"Video locator uses an unsupported scheme: {locator}. "
            "Only direct http(s) download URLs are supported; Cloud Storage (gs://) "
            "URIs must be downloaded separately with bucket credentials."
        )
        self.locator = locator


class DownloadFailed(VideoGenerationError):
    """Retrieving the synthesized payload failed."""
    pass
