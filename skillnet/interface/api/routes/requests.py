"""Learning request routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from skillnet.application.usecase.request import (
    ArchiveRequestUseCase,
    CancelRequestUseCase,
    CompleteRequestUseCase,
    CreateRequestRequest,
    CreateRequestUseCase,
    GetMeetingResponse,
    GetMeetingUseCase,
    GetRequestRequest,
    GetRequestUseCase,
    ListOwnRequestsRequest,
    ListOwnRequestsResponse,
    ListOwnRequestsUseCase,
    PublishRequestUseCase,
    RequestView,
    RetractRequestResponse,
    RetractRequestUseCase,
    StartMeetingUseCase,
    TransitionRequest,
)
from skillnet.domain.error import DomainError
from skillnet.domain.service import JWTService
from skillnet.domain.value import RequestKind
from skillnet.interface.api.identity import optional_caller, require_caller
from skillnet.interface.error import http_error

router = APIRouter(prefix="/requests", tags=["requests"], route_class=DishkaRoute)


class CreateRequestAPIRequest(BaseModel):
    """API request for creating a learning request."""

    kind: RequestKind
    title: str = Field(min_length=1, max_length=300)
    topic: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=10000)
    subject: str = Field(default="", max_length=100)
    max_participants: Optional[int] = Field(default=None, ge=1, le=100)
    draft: bool = True


@router.post("", response_model=RequestView, status_code=status.HTTP_201_CREATED)
async def create_request(
    request: CreateRequestAPIRequest,
    create_request_use_case: FromDishka[CreateRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Post a new learning request, as a draft unless draft is false.

    Requires authentication.
    """
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await create_request_use_case.execute(
            CreateRequestRequest(owner_id=user_id, **request.model_dump())
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/mine", response_model=ListOwnRequestsResponse)
async def list_own_requests(
    list_own_requests_use_case: FromDishka[ListOwnRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListOwnRequestsResponse:
    """Requests authored by the caller, newest first."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await list_own_requests_use_case.execute(
            ListOwnRequestsRequest(owner_id=user_id, limit=limit, offset=offset)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/{request_id}", response_model=RequestView)
async def get_request(
    request_id: str,
    get_request_use_case: FromDishka[GetRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Get a request.

    Authentication is optional. Authenticated non-owners are counted as a
    view; the meeting link is only included for members.
    """
    viewer_id = optional_caller(jwt_service, auth_token, authorization)
    try:
        return await get_request_use_case.execute(
            GetRequestRequest(request_id=request_id, viewer_id=viewer_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{request_id}/publish", response_model=RequestView)
async def publish_request(
    request_id: str,
    publish_use_case: FromDishka[PublishRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Publish a draft. Owner only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await publish_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{request_id}/cancel", response_model=RequestView)
async def cancel_request(
    request_id: str,
    cancel_use_case: FromDishka[CancelRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Cancel a request nobody has been accepted for. Owner only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await cancel_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{request_id}/complete", response_model=RequestView)
async def complete_request(
    request_id: str,
    complete_use_case: FromDishka[CompleteRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Complete a request and end its meeting. Members only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await complete_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{request_id}/archive", response_model=RequestView)
async def archive_request(
    request_id: str,
    archive_use_case: FromDishka[ArchiveRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Archive a request. Members only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await archive_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{request_id}/meeting", response_model=RequestView)
async def start_meeting(
    request_id: str,
    start_meeting_use_case: FromDishka[StartMeetingUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestView:
    """Provision the meeting of an accepted request. Members only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await start_meeting_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/{request_id}/meeting", response_model=GetMeetingResponse)
async def get_meeting(
    request_id: str,
    get_meeting_use_case: FromDishka[GetMeetingUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetMeetingResponse:
    """Meeting details of a request. Members only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await get_meeting_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.delete("/{request_id}", response_model=RetractRequestResponse)
async def retract_request(
    request_id: str,
    retract_use_case: FromDishka[RetractRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RetractRequestResponse:
    """Delete a request with its responses. Owner only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await retract_use_case.execute(
            TransitionRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e
