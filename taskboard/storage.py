from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import tree
from .db import Board
from .errors import BoardNotFound
from .utils import now_utc

logger = logging.getLogger(__name__)


class BoardStore:
    """Boards of one database session.

    Every list or task change is a read-modify-write of the board's whole
    ``lists`` document: decode, apply one ``tree`` operation, encode, commit.
    Concurrent writers to the same board are last-write-wins.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _save(self, board: Board) -> Board:
        board.updated_at = now_utc()
        self.session.commit()
        self.session.refresh(board)
        return board

    # === Board operations ===
    def create_board(
        self,
        owner: str,
        name: str,
        description: Optional[str] = None,
        position: int = 0,
    ) -> Board:
        board = Board(
            owner=owner,
            name=name,
            description=description or None,
            position=position or 0,
        )
        board.lists = []
        self.session.add(board)
        self.session.commit()
        self.session.refresh(board)
        logger.info("board %s created for user %s", board.id, owner)
        return board

    def list_boards(self, owner: str) -> List[Board]:
        stmt = (
            select(Board)
            .where(Board.owner == owner)
            .order_by(Board.position, Board.created_at, Board.id)
        )
        return list(self.session.scalars(stmt))

    def get_board(self, owner: str, board_id: str) -> Board:
        board = self.session.scalar(
            select(Board).where(Board.id == board_id, Board.owner == owner)
        )
        if board is None:
            raise BoardNotFound(board_id)
        return board

    def update_board(self, board: Board, fields: Mapping[str, Any]) -> Board:
        """Apply the given subset of name, description, custom_title, position and lists."""
        for key in ("name", "description", "custom_title", "position", "lists"):
            if key in fields:
                setattr(board, key, fields[key])
        logger.info("board %s updated: %s", board.id, ", ".join(sorted(fields)))
        return self._save(board)

    def delete_board(self, board: Board) -> None:
        board_id = board.id
        self.session.delete(board)
        self.session.commit()
        logger.info("board %s deleted", board_id)

    # === List operations ===
    def add_list(self, board: Board, title: Optional[str]) -> Dict[str, Any]:
        lists = board.lists
        list_ = tree.append_list(lists, title)
        board.lists = lists
        self._save(board)
        logger.info("list %s added to board %s", list_["id"], board.id)
        return list_

    def update_list(self, board: Board, list_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        lists = board.lists
        list_ = tree.replace_list(lists, list_id, fields)
        board.lists = lists
        self._save(board)
        logger.info("list %s updated on board %s", list_id, board.id)
        return list_

    def delete_list(self, board: Board, list_id: str) -> None:
        lists = board.lists
        tree.remove_list(lists, list_id)
        board.lists = lists
        self._save(board)
        logger.info("list %s removed from board %s", list_id, board.id)

    # === Task operations ===
    def add_task(
        self,
        board: Board,
        list_id: str,
        title: Optional[str],
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        lists = board.lists
        task = tree.append_task(lists, list_id, title, description)
        board.lists = lists
        self._save(board)
        logger.info("task %s added to list %s on board %s", task["id"], list_id, board.id)
        return task

    def update_task(
        self,
        board: Board,
        list_id: str,
        task_id: str,
        fields: Mapping[str, Any],
    ) -> Dict[str, Any]:
        lists = board.lists
        task = tree.replace_task(lists, list_id, task_id, fields)
        board.lists = lists
        self._save(board)
        logger.info("task %s updated in list %s on board %s", task_id, list_id, board.id)
        return task

    def delete_task(self, board: Board, list_id: str, task_id: str) -> None:
        lists = board.lists
        tree.remove_task(lists, list_id, task_id)
        board.lists = lists
        self._save(board)
        logger.info("task %s removed from list %s on board %s", task_id, list_id, board.id)
