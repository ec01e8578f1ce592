"""
Token store: holds the current RailData token and renews it on demand.

Tokens are scarce (the API issues only a handful per day), so refresh is a
compare-and-set on the token the caller saw rejected. When many tasks race
into refresh() with the same stale token, only the first one to get the
refresh lock calls getToken; the rest find the token already replaced and
return immediately.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Optional, Union

from raildata.api import GET_TOKEN, GetTokenRequest, RequestExecutor
from raildata.errors import BadCredentialsError, MissingCredentialsError

logger = logging.getLogger(__name__)

# listener(new_token, previous_token)
TokenUpdateListener = Callable[[str, str], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class Credentials:
    """Username and password used to request a new token."""

    username: str
    password: str = field(repr=False)


class TokenStore:
    """
    Current token, optional credentials and token-update listeners.

    Listeners are called once per successful refresh with the new token and
    the token it replaced. Each call runs as its own background task (plain
    functions in a worker thread), so a slow or failing listener never holds
    up the caller or the other listeners. There is no ordering between
    refreshes and no delivery guarantee unless wait_for_listeners() is
    awaited.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        token: str = "",
        credentials: Optional[Credentials] = None,
        listeners: Iterable[TokenUpdateListener] = (),
    ) -> None:
        self._executor = executor
        self._token = token
        self._credentials = credentials
        self._listeners: tuple[TokenUpdateListener, ...] = tuple(listeners)
        self._token_lock = threading.Lock()
        self._refresh_lock = asyncio.Lock()
        self._listener_tasks: set[asyncio.Task] = set()

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    def current_token(self) -> str:
        with self._token_lock:
            return self._token

    async def refresh(self, observed_token: str) -> None:
        """
        Replace `observed_token` with a newly issued one.

        Does nothing if the stored token is no longer `observed_token`.
        Raises MissingCredentialsError without credentials, BadCredentialsError
        if the server refuses them, and any executor error unchanged.
        """
        if self._credentials is None:
            raise MissingCredentialsError(GET_TOKEN.name)

        async with self._refresh_lock:
            if self.current_token() != observed_token:
                logger.debug("Token already refreshed by another caller")
                return

            logger.info("Requesting a new RailData token")
            output = await self._executor.execute(
                GET_TOKEN,
                GetTokenRequest(
                    username=self._credentials.username,
                    password=self._credentials.password,
                ),
            )
            if output.authenticated != "True":
                logger.warning("RailData rejected the configured credentials")
                raise BadCredentialsError()

            with self._token_lock:
                self._token = output.user_token

        logger.info("RailData token refreshed")
        self._notify(output.user_token, observed_token)

    async def wait_for_listeners(self) -> None:
        """Wait until every listener call scheduled so far has finished."""
        while self._listener_tasks:
            await asyncio.gather(*list(self._listener_tasks))

    def _notify(self, new_token: str, previous_token: str) -> None:
        for listener in self._listeners:
            task = asyncio.create_task(
                self._run_listener(listener, new_token, previous_token)
            )
            self._listener_tasks.add(task)
            task.add_done_callback(self._listener_tasks.discard)

    async def _run_listener(
        self, listener: TokenUpdateListener, new_token: str, previous_token: str
    ) -> None:
        try:
            if inspect.iscoroutinefunction(listener):
                await listener(new_token, previous_token)
            else:
                result = await asyncio.to_thread(listener, new_token, previous_token)
                if inspect.isawaitable(result):
                    await result
        except Exception:
            logger.exception("Token update listener %r failed", listener)
