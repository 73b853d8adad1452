"""Orchestration - analysis coordinator and message routing."""

from .orchestrator import AnalysisOrchestrator, Analyzer, AuthorSource
from .message_router import MessageRouter

__all__ = ["AnalysisOrchestrator", "Analyzer", "AuthorSource", "MessageRouter"]
