"""
Tests for the terminal session client
"""

import json
import httpx
import pytest

from gds_air_service.clients import TerminalClient
from gds_air_service.errors import TerminalRuntimeError


class TerminalServer:
    """In-memory terminal endpoint recording requests"""

    def __init__(self, screen=None, command_status=200, token="TOKEN1"):
        self.requests = []
        self.screen = screen or ["PNR001/WS QSBYC", "  1.1SMITH/JOHN MR"]
        self.command_status = command_status
        self.token = token

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/terminal/sessions":
            return httpx.Response(200, json={"session_token": self.token})
        if request.method == "POST" and path.endswith("/commands"):
            return httpx.Response(self.command_status, json={"response": self.screen})
        if request.method == "DELETE":
            return httpx.Response(200, json={})
        return httpx.Response(404)


def make_client(server):
    return TerminalClient(base_url="https://terminal.test", transport=httpx.MockTransport(server))


class TestTerminalClient:

    @pytest.mark.asyncio
    async def test_opens_session_once(self):
        """Test opens session once"""
        server = TerminalServer()
        client = make_client(server)

        first = await client.execute_command("*PNR001")
        await client.execute_command("*R")
        await client.close_session()

        assert first == "PNR001/WS QSBYC\n  1.1SMITH/JOHN MR"
        assert [(r.method, r.url.path) for r in server.requests] == [
            ("POST", "/terminal/sessions"),
            ("POST", "/terminal/sessions/TOKEN1/commands"),
            ("POST", "/terminal/sessions/TOKEN1/commands"),
            ("DELETE", "/terminal/sessions/TOKEN1"),
        ]
        assert json.loads(server.requests[1].content) == {"command": "*PNR001"}

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        """Test close without session"""
        server = TerminalServer()
        client = make_client(server)

        await client.close_session()

        assert server.requests == []
        assert client.session_token is None

    @pytest.mark.asyncio
    async def test_command_http_error(self):
        """Test command HTTP error"""
        server = TerminalServer(command_status=500)
        client = make_client(server)

        with pytest.raises(TerminalRuntimeError) as exc_info:
            await client.execute_command("*PNR001")
        await client.close_session()

        assert isinstance(exc_info.value.caused_by, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_missing_session_token(self):
        """Test missing session token"""
        server = TerminalServer(token=None)
        client = make_client(server)

        with pytest.raises(TerminalRuntimeError):
            await client.execute_command("*PNR001")
        await client.close_session()

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test connection error"""
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = TerminalClient(base_url="https://terminal.test", transport=httpx.MockTransport(handler))

        with pytest.raises(TerminalRuntimeError) as exc_info:
            await client.execute_command("*PNR001")
        await client.close_session()

        assert isinstance(exc_info.value.caused_by, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_non_json_command_response(self):
        """Test an HTML page in place of a screen raises a terminal error"""
        def handler(request):
            if request.url.path == "/terminal/sessions":
                return httpx.Response(200, json={"session_token": "TOKEN1"})
            if request.method == "DELETE":
                return httpx.Response(200, json={})
            return httpx.Response(200, text="<html>gateway</html>")

        client = TerminalClient(base_url="https://terminal.test", transport=httpx.MockTransport(handler))

        with pytest.raises(TerminalRuntimeError) as exc_info:
            await client.execute_command("*PNR001")
        await client.close_session()

        assert isinstance(exc_info.value.caused_by, ValueError)

    @pytest.mark.asyncio
    async def test_non_object_session_response(self):
        """Test a JSON body that is not an object raises a terminal error"""
        def handler(request):
            return httpx.Response(200, json=["TOKEN1"])

        client = TerminalClient(base_url="https://terminal.test", transport=httpx.MockTransport(handler))

        with pytest.raises(TerminalRuntimeError):
            await client.execute_command("*PNR001")
        await client.close_session()
