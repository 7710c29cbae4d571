"""Availability feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from skillnet.application.usecase.visibility import (
    ListAvailableRequest,
    ListAvailableRequestsUseCase,
    ListAvailableResponse,
    ListHiddenRequest,
    ListHiddenRequestsUseCase,
    ListHiddenResponse,
    UnhideRequest,
    UnhideRequestUseCase,
    UnhideResponse,
)
from skillnet.domain.error import DomainError
from skillnet.domain.service import JWTService
from skillnet.interface.api.identity import require_caller
from skillnet.interface.error import http_error

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)


@router.get("/available", response_model=ListAvailableResponse)
async def list_available(
    list_available_use_case: FromDishka[ListAvailableRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=30, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListAvailableResponse:
    """Requests the caller can still respond to, newest first."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await list_available_use_case.execute(
            ListAvailableRequest(viewer_id=user_id, limit=limit, offset=offset)
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/hidden", response_model=ListHiddenResponse)
async def list_hidden(
    list_hidden_use_case: FromDishka[ListHiddenRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListHiddenResponse:
    """Ids of the requests the caller marked not interested."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await list_hidden_use_case.execute(ListHiddenRequest(viewer_id=user_id))
    except DomainError as e:
        raise http_error(e) from e


@router.delete("/hidden/{request_id}", response_model=UnhideResponse)
async def unhide_request(
    request_id: str,
    unhide_use_case: FromDishka[UnhideRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UnhideResponse:
    """Show a hidden request in the caller's feed again."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await unhide_use_case.execute(
            UnhideRequest(viewer_id=user_id, request_id=request_id)
        )
    except DomainError as e:
        raise http_error(e) from e
