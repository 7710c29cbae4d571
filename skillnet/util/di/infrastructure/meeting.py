"""Meeting service providers."""

from dishka import Scope, provide

from skillnet.adapter.meeting import HttpMeetingProvisioner, JitsiMeetingProvisioner
from skillnet.config import Settings
from skillnet.domain.service import MeetingProvisioner
from skillnet.util.di.base import ProviderBase
from skillnet.util.error import ConfigurationError


class MeetingProvider(ProviderBase):
    """Meeting component base."""

    __mock_component__ = "meeting"


class ProdMeetingProvider(MeetingProvider):
    """Production meeting provider, chosen by MEETING__PROVIDER."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_meeting_provisioner(self, settings: Settings) -> MeetingProvisioner:
        """Provide meeting provisioner.

        Raises:
            ConfigurationError: If the http provider has no service URL
        """
        meeting = settings.meeting
        if meeting.provider == "http":
            if not meeting.service_url:
                raise ConfigurationError("MEETING__SERVICE_URL must be configured")
            return HttpMeetingProvisioner(
                base_url=meeting.service_url,
                api_key=meeting.api_key,
                timeout_seconds=meeting.request_timeout_seconds,
            )
        return JitsiMeetingProvisioner(
            room_secret=meeting.room_secret,
            domain=meeting.jitsi_domain,
            room_prefix=meeting.room_prefix,
        )
