# Motion workflow services
from antragsbot.services.correlation_store import CorrelationStore
from antragsbot.services.identity import ProposerResolver, resolve_invoker
from antragsbot.services.projector import TranscriptProjector
from antragsbot.services.reconciler import TranscriptReconciler

__all__ = [
    "CorrelationStore",
    "ProposerResolver",
    "resolve_invoker",
    "TranscriptProjector",
    "TranscriptReconciler",
]
