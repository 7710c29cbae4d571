"""Application layer DI providers."""

from dishka import Scope, provide

from skillnet.application.usecase.request import (
    ArchiveRequestUseCase,
    CancelRequestUseCase,
    CompleteRequestUseCase,
    CreateRequestUseCase,
    ExpireStaleRequestsUseCase,
    GetMeetingUseCase,
    GetRequestUseCase,
    ListOwnRequestsUseCase,
    PublishRequestUseCase,
    RetractRequestUseCase,
    StartMeetingUseCase,
)
from skillnet.application.usecase.response import (
    ListResponsesUseCase,
    SubmitResponseUseCase,
)
from skillnet.application.usecase.visibility import (
    ListAvailableRequestsUseCase,
    ListHiddenRequestsUseCase,
    UnhideRequestUseCase,
)
from skillnet.domain.service import RequestLifecycleCoordinator, VisibilityIndex
from skillnet.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Request use cases
    @provide
    def get_create_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> CreateRequestUseCase:
        """Provide create request use case."""
        return CreateRequestUseCase(coordinator=coordinator)

    @provide
    def get_get_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> GetRequestUseCase:
        """Provide get request use case."""
        return GetRequestUseCase(coordinator=coordinator)

    @provide
    def get_list_own_requests_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> ListOwnRequestsUseCase:
        """Provide list own requests use case."""
        return ListOwnRequestsUseCase(coordinator=coordinator)

    @provide
    def get_publish_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> PublishRequestUseCase:
        """Provide publish request use case."""
        return PublishRequestUseCase(coordinator=coordinator)

    @provide
    def get_cancel_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> CancelRequestUseCase:
        """Provide cancel request use case."""
        return CancelRequestUseCase(coordinator=coordinator)

    @provide
    def get_complete_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> CompleteRequestUseCase:
        """Provide complete request use case."""
        return CompleteRequestUseCase(coordinator=coordinator)

    @provide
    def get_archive_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> ArchiveRequestUseCase:
        """Provide archive request use case."""
        return ArchiveRequestUseCase(coordinator=coordinator)

    @provide
    def get_retract_request_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> RetractRequestUseCase:
        """Provide retract request use case."""
        return RetractRequestUseCase(coordinator=coordinator)

    @provide
    def get_start_meeting_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> StartMeetingUseCase:
        """Provide start meeting use case."""
        return StartMeetingUseCase(coordinator=coordinator)

    @provide
    def get_get_meeting_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> GetMeetingUseCase:
        """Provide get meeting use case."""
        return GetMeetingUseCase(coordinator=coordinator)

    @provide
    def get_expire_stale_requests_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> ExpireStaleRequestsUseCase:
        """Provide expire stale requests use case."""
        return ExpireStaleRequestsUseCase(coordinator=coordinator)

    # Response use cases
    @provide
    def get_submit_response_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> SubmitResponseUseCase:
        """Provide submit response use case."""
        return SubmitResponseUseCase(coordinator=coordinator)

    @provide
    def get_list_responses_use_case(
        self, coordinator: RequestLifecycleCoordinator
    ) -> ListResponsesUseCase:
        """Provide list responses use case."""
        return ListResponsesUseCase(coordinator=coordinator)

    # Visibility use cases
    @provide
    def get_list_available_use_case(
        self, visibility_index: VisibilityIndex
    ) -> ListAvailableRequestsUseCase:
        """Provide list available requests use case."""
        return ListAvailableRequestsUseCase(visibility_index=visibility_index)

    @provide
    def get_list_hidden_use_case(
        self, visibility_index: VisibilityIndex
    ) -> ListHiddenRequestsUseCase:
        """Provide list hidden requests use case."""
        return ListHiddenRequestsUseCase(visibility_index=visibility_index)

    @provide
    def get_unhide_use_case(
        self, visibility_index: VisibilityIndex
    ) -> UnhideRequestUseCase:
        """Provide unhide request use case."""
        return UnhideRequestUseCase(visibility_index=visibility_index)
