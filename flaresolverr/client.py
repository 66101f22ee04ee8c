"""FlareSolverr HTTP client."""

import asyncio
import json
import uuid
import weakref

import httpx
from pydantic import ValidationError

from flaresolverr.config import Settings, settings
from flaresolverr.models import Command, CommandType, Response, session_to_wire
from flaresolverr.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0

# Added to the configured timeout to form the local request deadline
DEADLINE_MARGIN_SECONDS = 10.0

TIMEOUT_MESSAGE = "maximum timeout reached"


class FlareSolverrError(Exception):
    """Base error for the FlareSolverr client."""

    pass


class RequestTimeoutError(FlareSolverrError):
    """FlareSolverr hit its maximum timeout before it could answer."""

    def __init__(self, message: str = TIMEOUT_MESSAGE, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnexpectedError(FlareSolverrError):
    """FlareSolverr answered with an error we do not classify further."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"unexpected error from FlareSolverr server: {message}")
        self.message = message
        self.status_code = status_code


class TransportError(FlareSolverrError):
    """The command could not be sent or the reply could not be read."""

    pass


def classify_error(response: Response, status_code: int | None = None) -> FlareSolverrError:
    """Map the message of a failed reply to an error."""
    if TIMEOUT_MESSAGE in response.message.lower():
        return RequestTimeoutError(response.message, status_code)
    return UnexpectedError(response.message, status_code)


_default_clients: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, httpx.AsyncClient]" = (
    weakref.WeakKeyDictionary()
)


def default_http_client() -> httpx.AsyncClient:
    """
    HTTP client shared by every FlareSolverrClient built without one.

    Pooled connections belong to the event loop that opened them, so each
    running loop gets its own client. Must be called from a coroutine.
    """
    loop = asyncio.get_running_loop()
    http_client = _default_clients.get(loop)
    if http_client is None:
        # No client-level timeout: each call passes its own deadline.
        http_client = httpx.AsyncClient(timeout=None)
        _default_clients[loop] = http_client
    return http_client


class FlareSolverrClient:
    """Client for the FlareSolverr command endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Command endpoint, e.g. http://127.0.0.1:8191/v1
            timeout: Maximum time FlareSolverr may spend per command, in
                seconds. 0 selects the default of 60 seconds.
            http_client: HTTP client to send commands with. Defaults to the
                client shared by the running event loop.
        """
        if timeout < 0:
            raise ValueError(f"timeout must not be negative: {timeout}")

        if timeout == 0:
            timeout = DEFAULT_TIMEOUT_SECONDS

        self._base_url = base_url
        self._timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "FlareSolverrClient":
        """Build a client from environment-driven settings."""
        config = config or settings
        return cls(config.base_url, config.timeout_seconds, http_client)

    @property
    def base_url(self) -> str:
        """Command endpoint URL."""
        return self._base_url

    @property
    def timeout(self) -> float:
        """Configured timeout in seconds."""
        return self._timeout

    @property
    def http_client(self) -> httpx.AsyncClient:
        """HTTP client used to send commands, resolved for the running loop by default."""
        if self._http_client is None:
            return default_http_client()
        return self._http_client

    @property
    def max_timeout_ms(self) -> int:
        """Configured timeout as sent in maxTimeout."""
        return round(self._timeout * 1000)

    @property
    def request_deadline(self) -> float:
        """Seconds a single exchange may take before it is abandoned."""
        return self._timeout + DEADLINE_MARGIN_SECONDS

    async def create_session(self, session: uuid.UUID | None, proxy: str | None = None) -> Response:
        """
        Launch a new browser instance that keeps its cookies until destroyed.

        Reusing a session avoids solving the same challenge repeatedly and
        skips launching a browser for every request.

        Args:
            session: Id to give the session. None or the nil UUID lets
                FlareSolverr pick one.
            proxy: Proxy URL for the browser, e.g. http://127.0.0.1:8888

        Returns:
            Reply with the session id set
        """
        command = Command(
            cmd=CommandType.SESSIONS_CREATE,
            session=session_to_wire(session),
            proxy=proxy or "",
        )
        return await self._do(command)

    async def list_sessions(self) -> Response:
        """List all active sessions."""
        return await self._do(Command(cmd=CommandType.SESSIONS_LIST))

    async def destroy_session(self, session: uuid.UUID) -> None:
        """Shut down a browser instance and remove its files."""
        command = Command(cmd=CommandType.SESSIONS_DESTROY, session=session_to_wire(session))
        await self._do(command)

    async def get(
        self,
        url: str,
        session: uuid.UUID | None = None,
        proxy: str | None = None,
    ) -> Response:
        """
        Fetch a page with an HTTP GET through FlareSolverr.

        Args:
            url: Page to fetch
            session: Session to run in. None uses a throwaway browser.
            proxy: Proxy URL for the browser

        Returns:
            Reply with the solution populated
        """
        command = Command(
            cmd=CommandType.REQUEST_GET,
            url=url,
            session=session_to_wire(session),
            proxy=proxy or "",
        )
        return await self._do(command)

    async def post(
        self,
        url: str,
        data: str,
        session: uuid.UUID | None = None,
        proxy: str | None = None,
    ) -> Response:
        """
        Send an HTTP POST through FlareSolverr.

        Args:
            url: Page to post to
            data: application/x-www-form-urlencoded body, sent as is
            session: Session to run in. None uses a throwaway browser.
            proxy: Proxy URL for the browser

        Returns:
            Reply with the solution populated
        """
        command = Command(
            cmd=CommandType.REQUEST_POST,
            url=url,
            session=session_to_wire(session),
            proxy=proxy or "",
            post_data=data,
        )
        return await self._do(command)

    async def _do(self, command: Command) -> Response:
        """Send a command and decode the reply."""
        # The client-level timeout always wins over a per-command value
        command.max_timeout = self.max_timeout_ms

        http_client = self.http_client

        try:
            payload = json.dumps(command.to_wire())
        except (TypeError, ValueError) as e:
            raise TransportError(f"invalid command: {e}") from e

        try:
            request = http_client.build_request(
                "POST",
                self._base_url,
                content=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.request_deadline,
            )
        except httpx.InvalidURL as e:
            raise TransportError(f"cannot make request: {e}") from e

        logger.debug("FlareSolverr command sent", cmd=command.cmd.value, url=command.url)

        try:
            resp = await asyncio.wait_for(
                http_client.send(request), timeout=self.request_deadline
            )
        except TimeoutError as e:
            raise TransportError(
                f"error making request to flaresolverr: no reply within {self.request_deadline}s"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"error making request to flaresolverr: {e}") from e

        try:
            response = Response.model_validate_json(resp.content)
        except ValidationError as e:
            raise TransportError(f"cannot read flaresolverr response: {e}") from e

        logger.debug(
            "FlareSolverr reply received",
            cmd=command.cmd.value,
            status_code=resp.status_code,
            status=response.status,
        )

        if resp.status_code != httpx.codes.OK:
            raise classify_error(response, resp.status_code)

        return response
