class NotFoundError(Exception):
    """An id did not resolve inside its parent."""

    code = "not_found"
    message = "Not found"

    def __init__(self, *ids: str) -> None:
        super().__init__(self.code, *ids)
        self.ids = ids


class BoardNotFound(NotFoundError):
    code = "board_not_found"
    message = "Board not found"


class ListNotFound(NotFoundError):
    code = "list_not_found"
    message = "List not found"


class TaskNotFound(NotFoundError):
    code = "task_not_found"
    message = "Task not found"
