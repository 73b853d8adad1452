"""Video synthesis - Veo long-running operation client and response shape resolver."""

from .resolver import (
    ResultShapeResolver,
    ShapeMatcher,
    DEFAULT_MATCHERS,
    is_plausible_locator,
)
from .lro_client import LongRunningOperationClient, Operation

__all__ = [
    "ResultShapeResolver",
    "ShapeMatcher",
    "DEFAULT_MATCHERS",
    "is_plausible_locator",
    "LongRunningOperationClient",
    "Operation",
]
