"""The message viewer: one fetch per mount, settled into a single render state."""

import asyncio
from typing import Optional

import httpx

from techcrush.config import AppConfig
from techcrush.logs import get_logger
from techcrush.models import Failed, Loaded, Loading, ViewState

logger = get_logger(__name__)


class ViewerError(Exception):
    """Raised when the viewer is mounted or settled out of order."""


class MessageViewer:
    """Fetches the service's message once per mount.

    The state starts as ``Loading`` and moves to ``Failed`` or ``Loaded``
    when the fetch settles. Fetch failures never raise; they become a
    ``Failed`` state carrying a readable description.

    Args:
        config: Resolved configuration; ``message_url`` is the fetch target.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` or
            ``httpx.ASGITransport`` in tests.
    """

    def __init__(
        self,
        config: AppConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.request_count = 0
        self._transport = transport
        self._state: ViewState = Loading()
        self._task: Optional[asyncio.Task] = None
        self._mount_token = 0

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def message(self) -> str:
        return self._state.message

    @property
    def mounted(self) -> bool:
        return self._task is not None

    def mount(self) -> asyncio.Task:
        """Reset to ``Loading`` and schedule the single fetch on the running loop."""
        if self._task is not None:
            raise ViewerError("viewer is already mounted")
        self._mount_token += 1
        self._state = Loading()
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._mount_token)
        )
        return self._task

    async def settle(self) -> ViewState:
        """Wait for the in-flight fetch and return the resulting state."""
        if self._task is None:
            raise ViewerError("viewer is not mounted")
        task = self._task
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()
        return self._state

    def unmount(self) -> None:
        """Cancel the in-flight fetch; a result arriving afterwards is dropped."""
        task, self._task = self._task, None
        self._mount_token += 1
        if task is not None and not task.done():
            task.cancel()

    async def _run(self, token: int) -> None:
        state = await self._fetch()
        if token != self._mount_token:
            logger.debug("Dropping result for unmounted viewer")
            return
        self._state = state

    async def _fetch(self) -> ViewState:
        url = self.config.message_url
        logger.debug("Fetching message", url=url)
        self.request_count += 1

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.config.timeout
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            return self._failed(url, str(exc) or type(exc).__name__)

        if not response.is_success:
            return self._failed(url, f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            return self._failed(url, f"Invalid JSON in response body: {exc}")

        text = data.get("message") if isinstance(data, dict) else None
        if not isinstance(text, str):
            return self._failed(url, "Response body is missing the 'message' field")
        return Loaded(text)

    def _failed(self, url: str, description: str) -> Failed:
        logger.error("Failed to fetch message", url=url, error=description)
        return Failed(description)


async def fetch_once(
    config: AppConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ViewState:
    """Mount a viewer, wait for its fetch to settle, unmount, and return the state."""
    viewer = MessageViewer(config, transport=transport)
    viewer.mount()
    try:
        return await viewer.settle()
    finally:
        viewer.unmount()
