"""Strongly typed identifiers for SkillNet domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Identity comes from the external identity service
UserId = NewType("UserId", UUID)

# Core domain entity identifiers
RequestId = NewType("RequestId", UUID)
ResponseId = NewType("ResponseId", UUID)

# Meeting ids are opaque strings chosen by the meeting provider
MeetingId = NewType("MeetingId", str)
