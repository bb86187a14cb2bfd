import asyncio
import base64
import json

import httpx
import pytest

from ws4sqlite_client.client import AsyncClient
from ws4sqlite_client.config import ClientBuilder, ClientConfig
from ws4sqlite_client.exc import InterfaceError, ServerOperationError
from ws4sqlite_client.request_builder import RequestBuilder
from ws4sqlite_client.types import AuthMode

URL = "http://localhost:12321/mydb"


def make_request():
    return (
        RequestBuilder()
        .add_query("SELECT * FROM TEMP")
        .add_statement("INSERT INTO TEMP (ID) VALUES (:id)")
        .with_values({"id": 2})
        .with_values({"id": 3})
        .build()
    )


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one answer."""

    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, bytes):
            return httpx.Response(self.status, content=self.body)
        return httpx.Response(self.status, json=self.body)


def make_client(handler, auth_mode=AuthMode.NONE):
    user, password = (None, None)
    if auth_mode != AuthMode.NONE:
        user, password = ("myUser1", "myHotPassword")
    config = ClientConfig(
        url=URL, auth_mode=auth_mode, user=user, password=password, user_agent="test-agent"
    )
    return AsyncClient(config, transport=httpx.MockTransport(handler))


class TestAsyncClient:
    @pytest.mark.asyncio
    async def test_send(self):
        handler = RecordingHandler(
            body={
                "results": [
                    {"success": True, "resultSet": [{"ID": 1}]},
                    {"success": True, "rowsUpdatedBatch": [1, 1]},
                ]
            }
        )

        async with make_client(handler) as client:
            response = await client.send(make_request())

        assert len(response) == 2
        assert response[0].result_set == ({"ID": 1},)
        assert response[1].rows_updated_batch == (1, 1)

        (request,) = handler.requests
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"] == "test-agent"
        assert json.loads(request.content) == make_request().to_dict()

    @pytest.mark.asyncio
    async def test_http_auth_header(self):
        handler = RecordingHandler(
            body={"results": [{"success": True, "resultSet": []}] * 2}
        )

        async with make_client(handler, auth_mode=AuthMode.HTTP) as client:
            await client.send(make_request())

        expected = base64.b64encode(b"myUser1:myHotPassword").decode()
        assert handler.requests[0].headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    async def test_inline_auth_body(self):
        handler = RecordingHandler(
            body={"results": [{"success": True, "resultSet": []}] * 2}
        )

        async with make_client(handler, auth_mode=AuthMode.INLINE) as client:
            await client.send(make_request())

        body = json.loads(handler.requests[0].content)
        assert body["credentials"] == {"user": "myUser1", "password": "myHotPassword"}

    @pytest.mark.asyncio
    async def test_server_error(self):
        handler = RecordingHandler(
            status=400, body={"error": "bad sql", "reqIdx": 1, "code": 400}
        )

        async with make_client(handler) as client:
            with pytest.raises(ServerOperationError) as excinfo:
                await client.send(make_request())

        assert (excinfo.value.req_idx, excinfo.value.code) == (1, 400)
        assert excinfo.value.message == "bad sql"

    @pytest.mark.asyncio
    async def test_unauthorized_with_basic_auth(self):
        handler = RecordingHandler(status=401, body=b"")

        async with make_client(handler, auth_mode=AuthMode.HTTP) as client:
            with pytest.raises(ServerOperationError) as excinfo:
                await client.send(make_request())

        assert (excinfo.value.req_idx, excinfo.value.code) == (-1, 401)

    @pytest.mark.asyncio
    async def test_transport_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.send(make_request())

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_sends_are_independent(self):
        def handler(request):
            body = json.loads(request.content)
            count = len(body["transaction"])
            return httpx.Response(
                200, json={"results": [{"success": True, "rowsUpdated": count}] * count}
            )

        requests = [
            RequestBuilder().add_statement("DELETE FROM T").build(),
            RequestBuilder()
            .add_statement("DELETE FROM T")
            .add_statement("DELETE FROM U")
            .build(),
        ]

        async with make_client(handler) as client:
            responses = await asyncio.gather(*(client.send(r) for r in requests))

        assert [len(r) for r in responses] == [1, 2]
        assert responses[1][0].rows_updated == 2

    @pytest.mark.asyncio
    async def test_send_after_close_fails(self):
        client = make_client(RecordingHandler(body={"results": []}))
        await client.aclose()

        with pytest.raises(InterfaceError, match="closed"):
            await client.send(make_request())

    @pytest.mark.asyncio
    async def test_build_async(self):
        client = ClientBuilder().with_url(URL).with_timeout(2).build_async()
        try:
            assert isinstance(client, AsyncClient)
            assert client.config.timeout == 2
        finally:
            await client.aclose()
