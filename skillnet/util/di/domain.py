"""Domain layer DI providers."""

from dishka import Scope, provide

from skillnet.config import AuthSettings, LifecycleSettings
from skillnet.domain.repository import (
    HiddenMarkRepository,
    RequestRepository,
    ResponseRepository,
)
from skillnet.domain.service import (
    JWTService,
    MeetingProvisioner,
    RequestLifecycleCoordinator,
    ResponseArbiter,
    VisibilityIndex,
)
from skillnet.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped to align with the repository session
    lifecycle. The arbiter holds no state and is shared.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide caller identity service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_response_arbiter(self) -> ResponseArbiter:
        """Provide response arbiter."""
        return ResponseArbiter()

    @provide
    def get_visibility_index(
        self,
        request_repository: RequestRepository,
        hidden_mark_repository: HiddenMarkRepository,
        lifecycle: LifecycleSettings,
    ) -> VisibilityIndex:
        """Provide visibility index."""
        return VisibilityIndex(
            request_repository=request_repository,
            hidden_mark_repository=hidden_mark_repository,
            page_size=lifecycle.visibility_page_size,
        )

    @provide
    def get_request_lifecycle_coordinator(
        self,
        request_repository: RequestRepository,
        response_repository: ResponseRepository,
        arbiter: ResponseArbiter,
        visibility_index: VisibilityIndex,
        meeting_provisioner: MeetingProvisioner,
        lifecycle: LifecycleSettings,
    ) -> RequestLifecycleCoordinator:
        """Provide request lifecycle coordinator."""
        return RequestLifecycleCoordinator(
            request_repository=request_repository,
            response_repository=response_repository,
            arbiter=arbiter,
            visibility_index=visibility_index,
            meeting_provisioner=meeting_provisioner,
            provision_timeout_seconds=lifecycle.provision_timeout_seconds,
            end_timeout_seconds=lifecycle.end_timeout_seconds,
            auto_provision_meetings=lifecycle.auto_provision_meetings,
            default_group_max_participants=lifecycle.default_group_max_participants,
        )
