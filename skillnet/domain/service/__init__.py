"""Domain services."""

from .arbiter_service import Arbitration, ResponseArbiter, Verdict
from .base import Service
from .jwt_service import JWTService
from .lifecycle import TRANSITIONS, can_transition, ensure_transition, is_respondable
from .meeting_provisioner import MeetingProvisioner
from .request_service import RequestLifecycleCoordinator, SubmitOutcome
from .visibility_service import AvailableRequests, VisibilityIndex

__all__ = [
    "Arbitration",
    "AvailableRequests",
    "JWTService",
    "MeetingProvisioner",
    "RequestLifecycleCoordinator",
    "ResponseArbiter",
    "Service",
    "SubmitOutcome",
    "TRANSITIONS",
    "VisibilityIndex",
    "Verdict",
    "can_transition",
    "ensure_transition",
    "is_respondable",
]
