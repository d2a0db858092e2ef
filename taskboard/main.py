import logging
import math
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import settings
from .auth import get_current_user
from .db import Board, get_session, init_db
from .errors import NotFoundError
from .schemas import (
    BoardCreate,
    BoardMessage,
    BoardOut,
    BoardUpdate,
    DescriptionUpdate,
    Health,
    ListCreate,
    Message,
    PositionUpdate,
    TaskCreate,
    Version,
)
from .storage import BoardStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("database ready at %s", settings.DATABASE_URL)
    yield


app = FastAPI(title="Taskboard API", version=settings.VERSION, lifespan=lifespan)
router = APIRouter(prefix=settings.API_PREFIX)


@app.exception_handler(NotFoundError)
async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("%s %s: %s %s", request.method, request.url.path, exc.code, exc.ids)
    return JSONResponse(status_code=404, content={"detail": exc.code, "message": exc.message})


# === Helpers ===


def get_store(session: Session = Depends(get_session)) -> BoardStore:
    return BoardStore(session)


def require_finite(value: Any) -> Any:
    """Reject NaN and infinities, which have no JSON encoding."""
    if isinstance(value, float) and not math.isfinite(value):
        raise HTTPException(status_code=422, detail="non_finite_number")
    if isinstance(value, dict):
        for item in value.values():
            require_finite(item)
    elif isinstance(value, list):
        for item in value:
            require_finite(item)
    return value


def board_out(board: Board) -> BoardOut:
    return BoardOut(
        id=board.id,
        name=board.name,
        description=board.description,
        customTitle=board.custom_title,
        position=board.position,
        owner=board.owner,
        lists=board.lists,
        createdAt=board.created_at,
        updatedAt=board.updated_at,
    )


# === Health & metadata ===


@router.get("/health", response_model=Health)
def health() -> Health:
    return Health()


@router.get("/version", response_model=Version)
def version() -> Version:
    return Version(version=settings.VERSION)


# === Board endpoints ===


@router.get("/boards", response_model=list[BoardOut])
def list_boards(user: str = Depends(get_current_user), store: BoardStore = Depends(get_store)):
    return [board_out(b) for b in store.list_boards(user)]


@router.get("/boards/{board_id}", response_model=BoardOut)
def get_board(board_id: str, user: str = Depends(get_current_user), store: BoardStore = Depends(get_store)):
    return board_out(store.get_board(user, board_id))


@router.post("/boards", response_model=BoardOut, status_code=201)
def create_board(
    payload: BoardCreate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    board = store.create_board(user, payload.name, payload.description, payload.position)
    return board_out(board)


@router.put("/boards/{board_id}", response_model=BoardOut)
def update_board(
    board_id: str,
    payload: BoardUpdate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    board = store.get_board(user, board_id)
    given = payload.model_dump(exclude_unset=True)
    fields: Dict[str, Any] = {}
    if given.get("name"):
        fields["name"] = given["name"]
    if "description" in given:
        fields["description"] = given["description"]
    if "customTitle" in given:
        fields["custom_title"] = given["customTitle"]
    if given.get("position") is not None:
        fields["position"] = given["position"]
    if given.get("lists") is not None:
        fields["lists"] = require_finite(given["lists"])
    return board_out(store.update_board(board, fields))


@router.delete("/boards/{board_id}", response_model=Message)
def delete_board(board_id: str, user: str = Depends(get_current_user), store: BoardStore = Depends(get_store)):
    store.delete_board(store.get_board(user, board_id))
    return Message(message="Board deleted")


@router.put("/boards/{board_id}/position", response_model=BoardMessage)
def update_board_position(
    board_id: str,
    payload: PositionUpdate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    board = store.update_board(store.get_board(user, board_id), {"position": payload.position})
    return BoardMessage(message="Board position updated", board=board_out(board))


@router.put("/boards/{board_id}/description", response_model=BoardMessage)
def update_board_description(
    board_id: str,
    payload: DescriptionUpdate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    board = store.update_board(store.get_board(user, board_id), {"description": payload.description})
    return BoardMessage(message="Board description updated", board=board_out(board))


# === List endpoints ===


@router.post("/boards/{board_id}/lists", response_model=dict, status_code=201)
def create_list(
    board_id: str,
    payload: ListCreate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    return store.add_list(store.get_board(user, board_id), payload.title)


@router.put("/boards/{board_id}/lists/{list_id}", response_model=dict)
def update_list(
    board_id: str,
    list_id: str,
    payload: Dict[str, Any] = Body(...),
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    return store.update_list(store.get_board(user, board_id), list_id, require_finite(payload))


@router.delete("/boards/{board_id}/lists/{list_id}", response_model=Message)
def delete_list(
    board_id: str,
    list_id: str,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    store.delete_list(store.get_board(user, board_id), list_id)
    return Message(message="List deleted")


# === Task endpoints ===


@router.post("/boards/{board_id}/lists/{list_id}/tasks", response_model=dict, status_code=201)
def create_task(
    board_id: str,
    list_id: str,
    payload: TaskCreate,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    board = store.get_board(user, board_id)
    return store.add_task(board, list_id, payload.title, payload.description)


@router.put("/boards/{board_id}/lists/{list_id}/tasks/{task_id}", response_model=dict)
def update_task(
    board_id: str,
    list_id: str,
    task_id: str,
    payload: Dict[str, Any] = Body(...),
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    return store.update_task(store.get_board(user, board_id), list_id, task_id, require_finite(payload))


@router.delete("/boards/{board_id}/lists/{list_id}/tasks/{task_id}", response_model=Message)
def delete_task(
    board_id: str,
    list_id: str,
    task_id: str,
    user: str = Depends(get_current_user),
    store: BoardStore = Depends(get_store),
):
    store.delete_task(store.get_board(user, board_id), list_id, task_id)
    return Message(message="Task deleted")


app.include_router(router)
