"""Request orchestration for toka."""

from toka.core.orchestrator import RequestOrchestrator, createOrchestratorWithSampleConfig

__all__ = [
    "RequestOrchestrator",
    "createOrchestratorWithSampleConfig",
]
