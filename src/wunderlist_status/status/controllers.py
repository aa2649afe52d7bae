"""Controller for the status CLI command."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from pathlib import Path

import click
import httpx

from wunderlist_status.config import Settings
from wunderlist_status.http.client import ApiConfig, RemoteClient, RemoteError
from wunderlist_status.status.cache import RenderCache
from wunderlist_status.status.models import ListWithTasks
from wunderlist_status.status.pipeline import fetch_lists_with_tasks
from wunderlist_status.status.presenter import StatusPresenter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StatusCommand:
    """CLI inputs for the status command."""

    access_token: str | None
    client_id: str | None
    cache_path: Path | None = None
    color: bool | None = None


@dataclass(slots=True)
class StatusOutcome:
    """What one status run printed."""

    text: str
    error: RemoteError | None = None


def _local_now() -> datetime:
    return datetime.now().astimezone()


class StatusCliController:
    """Coordinates fetch, render and fallback for one invocation."""

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        now: Callable[[], datetime] = _local_now,
    ) -> None:
        self._transport = transport
        self._now = now

    def run(
        self,
        command: StatusCommand,
        echo: Callable[..., None] = click.echo,
    ) -> StatusOutcome:
        settings = Settings.from_env(
            access_token=command.access_token,
            client_id=command.client_id,
            cache_path=command.cache_path,
            color=command.color,
        )
        settings.validate()
        presenter = StatusPresenter(
            cache=RenderCache(settings.cache.path),
            echo=partial(echo, color=settings.color),
            now=self._now,
            color=settings.color is not False,
        )
        api_config = ApiConfig(
            host=settings.api.host,
            access_token=settings.api.access_token,
            client_id=settings.api.client_id,
        )

        logger.debug("Fetching lists from %s", api_config.host)
        try:
            lists = asyncio.run(self._fetch(api_config))
        except RemoteError as exc:
            text = presenter.show_failure(exc)
            return StatusOutcome(text=text, error=exc)
        return StatusOutcome(text=presenter.show_lists(lists))

    async def _fetch(self, api_config: ApiConfig) -> list[ListWithTasks]:
        async with RemoteClient(api_config, transport=self._transport) as client:
            return await fetch_lists_with_tasks(client)
