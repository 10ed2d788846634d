# orders/sync.py
"""
Keeps a live view's store in step with the orders tables.

Change events from the ``orders`` and ``order_items`` groups and the
optional poll timer are independent triggers of a single reload. Reloads
are coalesced: one runs at a time, triggers arriving meanwhile collapse
into exactly one follow-up, and follow-ups wait ``min_interval`` seconds.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional

from django.conf import settings

from core.exceptions import SubscriptionError

from .signals_orders import ORDER_ITEMS_GROUP, ORDERS_GROUP

logger = logging.getLogger(__name__)

CHANGE_GROUPS = (ORDERS_GROUP, ORDER_ITEMS_GROUP)


class SyncBridge:
    def __init__(
        self,
        store,
        channel_layer,
        channel_name: str,
        *,
        groups: Iterable[str] = CHANGE_GROUPS,
        poll_interval: Optional[float] = None,
        min_interval: Optional[float] = None,
        on_reload: Optional[Callable[[object], Awaitable[None]]] = None,
    ):
        self.store = store
        self.channel_layer = channel_layer
        self.channel_name = channel_name
        self.groups = tuple(groups)
        self.poll_interval = poll_interval
        if min_interval is None:
            min_interval = float(getattr(settings, "ORDERS_RELOAD_MIN_INTERVAL", 0.5))
        self.min_interval = min_interval
        self.on_reload = on_reload

        self.reload_count = 0
        self._joined: list[str] = []
        self._pending = False
        self._stopped = False
        self._reload_task: Optional[asyncio.Task] = None
        self._poll_task: Optional[asyncio.Task] = None

    @property
    def reloading(self) -> bool:
        return self._reload_task is not None and not self._reload_task.done()

    async def start(self) -> None:
        """Initial snapshot, then join the change groups and start polling."""
        await self.store.load_menu_items()
        await self._reload_once()

        try:
            for group in self.groups:
                await self.channel_layer.group_add(group, self.channel_name)
                self._joined.append(group)
        except Exception as exc:
            logger.warning("Could not join change group(s) %s: %s", self.groups, exc)
            if not self.poll_interval:
                logger.warning("View %s has no poll fallback; it will not see changes", self.channel_name)
            raise SubscriptionError() from exc

        if self.poll_interval:
            self._poll_task = asyncio.ensure_future(self._poll())
            self._poll_task.add_done_callback(self._log_task_failure)

    def notify(self) -> None:
        """Request a reload; collapses into the running one if there is one."""
        if self._stopped:
            return
        if self.reloading:
            self._pending = True
            return
        self._reload_task = asyncio.ensure_future(self._run())
        self._reload_task.add_done_callback(self._log_task_failure)

    async def wait_idle(self) -> None:
        while self.reloading:
            # failures are logged by the done callback
            await asyncio.wait({self._reload_task})

    def _log_task_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Live reload task for %s failed", self.channel_name,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def stop(self) -> None:
        """Leave the change groups and cancel the poll and any queued reload."""
        self._stopped = True
        for task in (self._poll_task, self._reload_task):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._poll_task = None
        self._reload_task = None

        for group in self._joined:
            try:
                await self.channel_layer.group_discard(group, self.channel_name)
            except Exception:
                logger.warning("Could not leave change group %s", group, exc_info=True)
        self._joined = []

    async def _run(self) -> None:
        while True:
            self._pending = False
            await self._reload_once()
            if self._stopped or not self._pending:
                return
            await asyncio.sleep(self.min_interval)

    async def _reload_once(self) -> None:
        state = await self.store.refresh()
        self.reload_count += 1
        if self.on_reload is not None:
            try:
                await self.on_reload(state)
            except Exception:
                logger.exception("Pushing reloaded snapshot failed")

    async def _poll(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self.poll_interval)
            self.notify()
