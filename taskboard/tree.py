from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .errors import ListNotFound, TaskNotFound
from .utils import new_uuid, unique_id

# Lists and tasks are plain dicts so that the stored shape is exactly what is
# served:
#   [{"id", "title", "tasks": [{"id", "title", "description", "completed"}]}]


def _index_of(items: list, item_id: str) -> int:
    for i, item in enumerate(items):
        if isinstance(item, dict) and item.get("id") == item_id:
            return i
    return -1


def _ids(items: list) -> list[str]:
    return [item.get("id") for item in items if isinstance(item, dict)]


def _list_index(lists: list, list_id: str) -> int:
    i = _index_of(lists, list_id)
    if i == -1:
        raise ListNotFound(list_id)
    return i


def _tasks(list_: dict) -> list:
    tasks = list_.get("tasks")
    return tasks if isinstance(tasks, list) else []


def _task_index(tasks: list, list_id: str, task_id: str) -> int:
    i = _index_of(tasks, task_id)
    if i == -1:
        raise TaskNotFound(list_id, task_id)
    return i


# === Lists ===


def append_list(lists: list, title: Optional[str], new_id: Callable[[], str] = new_uuid) -> dict:
    list_ = {"id": unique_id(_ids(lists), new_id), "title": title, "tasks": []}
    lists.append(list_)
    return list_


def replace_list(lists: list, list_id: str, fields: Mapping[str, Any]) -> dict:
    i = _list_index(lists, list_id)
    lists[i] = {**lists[i], **fields}
    return lists[i]


def remove_list(lists: list, list_id: str) -> dict:
    return lists.pop(_list_index(lists, list_id))


# === Tasks ===


def append_task(
    lists: list,
    list_id: str,
    title: Optional[str],
    description: Optional[str] = None,
    new_id: Callable[[], str] = new_uuid,
) -> dict:
    list_ = lists[_list_index(lists, list_id)]
    tasks = list_.get("tasks")
    if not isinstance(tasks, list):
        tasks = list_["tasks"] = []
    task = {
        "id": unique_id(_ids(tasks), new_id),
        "title": title,
        "description": description or "",
        "completed": False,
    }
    tasks.append(task)
    return task


def replace_task(lists: list, list_id: str, task_id: str, fields: Mapping[str, Any]) -> dict:
    tasks = _tasks(lists[_list_index(lists, list_id)])
    i = _task_index(tasks, list_id, task_id)
    tasks[i] = {**tasks[i], **fields}
    return tasks[i]


def remove_task(lists: list, list_id: str, task_id: str) -> dict:
    tasks = _tasks(lists[_list_index(lists, list_id)])
    return tasks.pop(_task_index(tasks, list_id, task_id))
