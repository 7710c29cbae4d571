"""Unit tests for the HTTP meeting provisioner."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import httpx
import pytest

from skillnet.adapter.error import MeetingProviderError
from skillnet.adapter.meeting import HttpMeetingProvisioner
from skillnet.domain.value import MeetingId, RequestId, UserId

BASE_URL = "https://meetings.example.test"


def mock_client(mock_async_client, **methods):
    """Wire an AsyncMock client into the patched httpx.AsyncClient."""
    client = AsyncMock()
    for name, value in methods.items():
        setattr(client, name, value)
    mock_async_client.return_value.__aenter__.return_value = client
    return client


def response(status_code, method="POST", **kwargs):
    return httpx.Response(
        status_code, request=httpx.Request(method, f"{BASE_URL}/meetings"), **kwargs
    )


class TestProvision:
    """Tests for provision."""

    @pytest.mark.asyncio
    async def test_provision_posts_request_with_idempotency_key(self):
        provisioner = HttpMeetingProvisioner(BASE_URL + "/", api_key="secret")
        request_id = RequestId(uuid4())
        owner = UserId(uuid4())
        participant = UserId(uuid4())

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            client = mock_client(
                mock_async_client,
                post=AsyncMock(
                    return_value=response(
                        201,
                        json={"meeting_id": "m-1", "join_url": "https://join/m-1"},
                    )
                ),
            )

            meeting = await provisioner.provision(request_id, owner, [participant])

        assert meeting.meeting_id == "m-1"
        assert meeting.join_url == "https://join/m-1"
        args, kwargs = client.post.call_args
        assert args[0] == f"{BASE_URL}/meetings"
        assert kwargs["headers"]["Idempotency-Key"] == str(request_id)
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["json"] == {
            "request_id": str(request_id),
            "owner_id": str(owner),
            "participant_ids": [str(participant)],
        }

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            mock_client(
                mock_async_client,
                post=AsyncMock(return_value=response(502, text="bad gateway")),
            )

            with pytest.raises(MeetingProviderError) as exc_info:
                await provisioner.provision(RequestId(uuid4()), UserId(uuid4()), [])

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            mock_client(
                mock_async_client,
                post=AsyncMock(side_effect=httpx.ConnectError("refused")),
            )

            with pytest.raises(MeetingProviderError, match="unreachable"):
                await provisioner.provision(RequestId(uuid4()), UserId(uuid4()), [])

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            mock_client(
                mock_async_client,
                post=AsyncMock(return_value=response(200, json={"id": "m-1"})),
            )

            with pytest.raises(MeetingProviderError, match="Malformed"):
                await provisioner.provision(RequestId(uuid4()), UserId(uuid4()), [])


class TestEnd:
    """Tests for end."""

    @pytest.mark.asyncio
    async def test_end_deletes_meeting(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            client = mock_client(
                mock_async_client,
                delete=AsyncMock(return_value=response(204, method="DELETE")),
            )

            await provisioner.end(MeetingId("m-1"))

        assert client.delete.call_args.args[0] == f"{BASE_URL}/meetings/m-1"

    @pytest.mark.asyncio
    async def test_missing_meeting_counts_as_ended(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            mock_client(
                mock_async_client,
                delete=AsyncMock(return_value=response(404, method="DELETE")),
            )

            await provisioner.end(MeetingId("m-1"))

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self):
        provisioner = HttpMeetingProvisioner(BASE_URL)

        with patch("skillnet.adapter.meeting.http.httpx.AsyncClient") as mock_async_client:
            mock_client(
                mock_async_client,
                delete=AsyncMock(return_value=response(500, method="DELETE")),
            )

            with pytest.raises(MeetingProviderError):
                await provisioner.end(MeetingId("m-1"))
