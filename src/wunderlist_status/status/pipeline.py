"""Fetch lists and tasks and reassemble them in server order."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from wunderlist_status.http.client import RemoteClient
from wunderlist_status.status.models import ListWithTasks, Task, TaskList, parse_collection
from wunderlist_status.status.ordering import order_payloads_by_positions, parse_positions

logger = logging.getLogger(__name__)

LISTS_PATH = "/api/v1/lists"
LIST_POSITIONS_PATH = "/api/v1/list_positions"
TASKS_PATH = "/api/v1/tasks"
TASK_POSITIONS_PATH = "/api/v1/task_positions"


class TaskListPipeline:
    """Builds the ordered lists-with-tasks view for one run.

    Lists and their ordering are fetched together, then every list's tasks
    and task ordering are fetched concurrently. Any failed request fails the
    whole run; there is no partial result.
    """

    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    async def fetch_lists_with_tasks(self) -> list[ListWithTasks]:
        lists = await self.fetch_ordered_lists()
        task_groups = await gather_all(*(self.fetch_ordered_tasks(entry.id) for entry in lists))
        logger.debug(
            "Fetched %d lists with %d tasks",
            len(lists),
            sum(len(tasks) for tasks in task_groups),
        )
        return [
            ListWithTasks(task_list=entry, tasks=tuple(tasks))
            for entry, tasks in zip(lists, task_groups, strict=True)
        ]

    async def fetch_ordered_lists(self) -> list[TaskList]:
        raw_lists, raw_positions = await gather_all(
            self.client.get(LISTS_PATH),
            self.client.get(LIST_POSITIONS_PATH),
        )
        ordered = order_payloads_by_positions(
            parse_collection(raw_lists, "list"),
            parse_positions(raw_positions),
        )
        return [TaskList.from_payload(item) for item in ordered]

    async def fetch_ordered_tasks(self, list_id: int) -> list[Task]:
        params = {"list_id": list_id}
        raw_tasks, raw_positions = await gather_all(
            self.client.get(TASKS_PATH, params=params),
            self.client.get(TASK_POSITIONS_PATH, params=params),
        )
        ordered = order_payloads_by_positions(
            parse_collection(raw_tasks, "task"),
            parse_positions(raw_positions),
        )
        return [Task.from_payload(item) for item in ordered]


async def gather_all(*awaitables: Awaitable[Any]) -> list[Any]:
    """Await everything or fail on the first error, cancelling the rest."""

    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def fetch_lists_with_tasks(client: RemoteClient) -> list[ListWithTasks]:
    """Run the pipeline with the provided client."""

    return await TaskListPipeline(client).fetch_lists_with_tasks()
