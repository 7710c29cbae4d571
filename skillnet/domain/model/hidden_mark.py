"""Hidden mark entity.

A viewer-scoped suppression created when a viewer is not interested in a
request. It only affects that viewer's availability listing and never
touches the request itself.
"""

from datetime import datetime

from pydantic import Field

from skillnet.domain.model.common import DomainModel
from skillnet.domain.value import RequestId, UserId


class HiddenMark(DomainModel):
    """(viewer, request) suppression pair; unique per pair."""

    viewer_id: UserId
    request_id: RequestId
    hidden_at: datetime = Field(default_factory=datetime.now)
