from .resolution_orchestrator import ResolutionOrchestrator
from .orchestrator_factory import create_orchestrator

__all__ = ["ResolutionOrchestrator", "create_orchestrator"]
