"""
Terminal emulation client

Each TerminalClient owns one remote session. The session is opened lazily on
the first command and stays bound to the client until close_session().
"""

import time
import httpx
from typing import Any, Dict, Optional

from ..config import config
from ..errors import TerminalRuntimeError
from ..interfaces.terminal import TerminalInterface
from ..utils.logger import get_logger, log_remote_call

logger = get_logger(__name__)


class TerminalClient(TerminalInterface):
    """HTTP client for a stateful GDS terminal session"""

    def __init__(
        self,
        base_url: str = None,
        username: str = None,
        password: str = None,
        target_branch: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url or config.terminal.base_url
        self.username = username or config.gds_api.username
        self.password = password or config.gds_api.password
        self.target_branch = target_branch or config.gds_api.target_branch
        self.timeout = timeout or config.terminal.timeout
        self.session_token: Optional[str] = None

        headers = {"Content-Type": "application/json"}
        if self.target_branch:
            headers["X-Target-Branch"] = self.target_branch

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            auth=(self.username, self.password) if self.username else None,
            headers=headers,
            transport=transport,
        )

    async def _send(self, operation: str, method: str, url: str, **kwargs) -> httpx.Response:
        start_time = time.perf_counter()
        success = False

        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            success = True
            return response

        except httpx.HTTPStatusError as e:
            raise TerminalRuntimeError(
                message=f"Terminal {operation} failed with HTTP {e.response.status_code}",
                caused_by=e
            ) from e
        except httpx.RequestError as e:
            raise TerminalRuntimeError(
                message=f"Terminal connection error: {str(e)}",
                caused_by=e
            ) from e
        finally:
            log_remote_call("terminal", operation, time.perf_counter() - start_time, success)

    @staticmethod
    def _json_body(operation: str, response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise TerminalRuntimeError(
                message=f"Invalid terminal response for {operation}",
                caused_by=e
            ) from e

        if not isinstance(body, dict):
            raise TerminalRuntimeError(message=f"Invalid terminal response for {operation}")
        return body

    async def _open_session(self) -> str:
        response = await self._send("open_session", "POST", "/terminal/sessions")
        token = self._json_body("open_session", response).get("session_token")
        if not token:
            raise TerminalRuntimeError(message="Terminal did not return a session token")

        logger.debug("Terminal session opened")
        return token

    async def execute_command(self, command: str) -> str:
        """Execute a command and return the screen as newline-joined lines"""
        if self.session_token is None:
            self.session_token = await self._open_session()

        response = await self._send(
            "execute_command",
            "POST",
            f"/terminal/sessions/{self.session_token}/commands",
            json={"command": command}
        )
        screen = self._json_body("execute_command", response).get("response", [])

        if isinstance(screen, list):
            return "\n".join(screen)
        return str(screen)

    async def close_session(self) -> None:
        """Close the remote session and the HTTP client"""
        try:
            if self.session_token is not None:
                await self._send("close_session", "DELETE", f"/terminal/sessions/{self.session_token}")
                logger.debug("Terminal session closed")
        finally:
            self.session_token = None
            await self.client.aclose()
