"""Task list persisted to key-value storage."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime
from typing import Any

from fetchstate.observable import Observable
from fetchstate.storage import TASKS_KEY, KeyValueStorage

logger = logging.getLogger(__name__)

PRIORITIES = ("low", "medium", "high")
FILTERS = ("all", "active", "completed")


@dataclass(frozen=True, slots=True)
class Task:
    """A single task.

    ``created_at`` and ``completed_at`` are ISO timestamps.
    """

    id: int
    title: str
    description: str = ""
    completed: bool = False
    priority: str = "medium"
    created_at: str | None = None
    completed_at: str | None = None


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    active: int
    completed: int


def _from_dict(raw: dict[str, Any]) -> Task | None:
    known = {f.name for f in fields(Task)}
    data = {k: v for k, v in raw.items() if k in known}
    if not isinstance(data.get("id"), int) or not data.get("title"):
        return None
    return Task(**data)


def _validate(title: str | None, priority: str | None) -> None:
    if title is not None and not title.strip():
        raise ValueError("Task title must not be empty")
    if priority is not None and priority not in PRIORITIES:
        raise ValueError(f"Unknown priority: {priority!r}")


class TaskList:
    """CRUD over a list of tasks, saved after every change."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._storage = storage
        self._now = now
        self._state: Observable[tuple[Task, ...]] = Observable(self._load())

    def _load(self) -> tuple[Task, ...]:
        raw = self._storage.get_item(TASKS_KEY)
        if raw is None:
            return ()
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("ignoring unreadable task list in storage")
            return ()
        if not isinstance(items, list):
            logger.warning("ignoring non-list task data in storage")
            return ()
        parsed = (_from_dict(item) for item in items if isinstance(item, dict))
        tasks = [t for t in parsed if t is not None]
        return tuple(tasks)

    def _save(self, tasks: tuple[Task, ...]) -> None:
        self._storage.set_item(TASKS_KEY, json.dumps([asdict(t) for t in tasks]))
        self._state.set(tasks)

    def _timestamp(self) -> str:
        return self._now().isoformat(timespec="seconds")

    def subscribe(self, listener: Callable[[tuple[Task, ...]], None]) -> Callable[[], None]:
        return self._state.subscribe(listener)

    def all(self) -> list[Task]:
        return list(self._state.get())

    def get(self, task_id: int) -> Task:
        for task in self._state.get():
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def add(self, title: str, description: str = "", priority: str = "medium") -> Task:
        """Create a task at the end of the list."""
        _validate(title, priority)
        tasks = self._state.get()
        next_id = max((t.id for t in tasks), default=0) + 1
        task = Task(
            id=next_id,
            title=title.strip(),
            description=description.strip(),
            priority=priority,
            created_at=self._timestamp(),
        )
        self._save((*tasks, task))
        return task

    def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """Edit fields of a task; omitted fields are left alone."""
        _validate(title, priority)
        task = self.get(task_id)
        changes: dict[str, Any] = {}
        if title is not None:
            changes["title"] = title.strip()
        if description is not None:
            changes["description"] = description.strip()
        if priority is not None:
            changes["priority"] = priority
        return self._replace(replace(task, **changes))

    def toggle(self, task_id: int) -> Task:
        """Flip a task between active and completed."""
        task = self.get(task_id)
        completed = not task.completed
        return self._replace(
            replace(
                task,
                completed=completed,
                completed_at=self._timestamp() if completed else None,
            )
        )

    def _replace(self, updated: Task) -> Task:
        self._save(tuple(updated if t.id == updated.id else t for t in self._state.get()))
        return updated

    def delete(self, task_id: int) -> None:
        self.get(task_id)
        self._save(tuple(t for t in self._state.get() if t.id != task_id))

    def clear_completed(self) -> int:
        """Remove completed tasks; returns how many were removed."""
        tasks = self._state.get()
        kept = tuple(t for t in tasks if not t.completed)
        if len(kept) != len(tasks):
            self._save(kept)
        return len(tasks) - len(kept)

    def filter(self, status: str = "all") -> list[Task]:
        if status not in FILTERS:
            raise ValueError(f"Unknown filter: {status!r}")
        tasks = self._state.get()
        if status == "active":
            return [t for t in tasks if not t.completed]
        if status == "completed":
            return [t for t in tasks if t.completed]
        return list(tasks)

    @property
    def stats(self) -> TaskStats:
        tasks = self._state.get()
        done = sum(1 for t in tasks if t.completed)
        return TaskStats(total=len(tasks), active=len(tasks) - done, completed=done)
