"""Response routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from skillnet.application.usecase.response import (
    ListResponsesRequest,
    ListResponsesResponse,
    ListResponsesUseCase,
    SubmitResponseRequest,
    SubmitResponseResponse,
    SubmitResponseUseCase,
)
from skillnet.domain.error import DomainError
from skillnet.domain.service import JWTService
from skillnet.domain.value import ResponseDecision
from skillnet.interface.api.identity import require_caller
from skillnet.interface.error import http_error

router = APIRouter(prefix="/requests", tags=["responses"], route_class=DishkaRoute)


class SubmitResponseAPIRequest(BaseModel):
    """API request for responding to a learning request."""

    decision: ResponseDecision
    message: str = Field(default="", max_length=2000)


@router.post(
    "/{request_id}/responses",
    response_model=SubmitResponseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_response(
    request_id: str,
    request: SubmitResponseAPIRequest,
    submit_response_use_case: FromDishka[SubmitResponseUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SubmitResponseResponse:
    """Accept, decline or pass on a request.

    Requires authentication. A 409 means the request is no longer
    available (already accepted, full or closed). A 503 with
    ``retryable: true`` means the acceptance was recorded but the meeting
    could not be provisioned; submitting the acceptance again retries it.
    """
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await submit_response_use_case.execute(
            SubmitResponseRequest(
                request_id=request_id,
                responder_id=user_id,
                decision=request.decision,
                message=request.message,
            )
        )
    except DomainError as e:
        raise http_error(e) from e


@router.get("/{request_id}/responses", response_model=ListResponsesResponse)
async def list_responses(
    request_id: str,
    list_responses_use_case: FromDishka[ListResponsesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListResponsesResponse:
    """Responses to a request, newest first. Owner only."""
    user_id = require_caller(jwt_service, auth_token, authorization)
    try:
        return await list_responses_use_case.execute(
            ListResponsesRequest(request_id=request_id, caller_id=user_id)
        )
    except DomainError as e:
        raise http_error(e) from e
