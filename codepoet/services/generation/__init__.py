from codepoet.services.generation.generation_orchestrator import (
    GenerationOrchestrator,
    GenerationResult,
    PersistWarning,
)

__all__ = ["GenerationOrchestrator", "GenerationResult", "PersistWarning"]
