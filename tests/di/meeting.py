"""Mock meeting providers for testing."""

from dishka import Scope, provide

from skillnet.adapter.meeting import MockMeetingProvisioner
from skillnet.domain.service import MeetingProvisioner
from skillnet.util.di.infrastructure.meeting import MeetingProvider


class MockMeetingProvider(MeetingProvider):
    """Mock meeting provider recording provision and end calls.

    APP scope: each test builds its own container, so tests share the
    provisioner with the coordinator and can script failures on it.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_meeting_provisioner(self) -> MeetingProvisioner:
        """Provide mock meeting provisioner."""
        return MockMeetingProvisioner()
