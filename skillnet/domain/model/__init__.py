"""Domain model entities for SkillNet."""

from skillnet.domain.model.hidden_mark import HiddenMark
from skillnet.domain.model.request import LearningRequest
from skillnet.domain.model.response import RequestResponse

__all__ = [
    "LearningRequest",
    "RequestResponse",
    "HiddenMark",
]
