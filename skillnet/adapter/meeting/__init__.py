"""Meeting provisioner implementations."""

from .http import HttpMeetingProvisioner
from .jitsi import JitsiMeetingProvisioner, room_name_for
from .mock import MockMeetingProvisioner

__all__ = [
    "HttpMeetingProvisioner",
    "JitsiMeetingProvisioner",
    "MockMeetingProvisioner",
    "room_name_for",
]
