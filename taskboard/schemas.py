from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Health(BaseModel):
    status: str = "ok"


class Version(BaseModel):
    version: str


class Message(BaseModel):
    message: str


class BoardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=140)
    description: Optional[str] = Field(default=None, max_length=2000)
    position: int = 0


class BoardUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=140)
    description: Optional[str] = Field(default=None, max_length=2000)
    customTitle: Optional[str] = Field(default=None, max_length=140)
    position: Optional[int] = None
    lists: Optional[list[Any]] = None


class PositionUpdate(BaseModel):
    position: int


class DescriptionUpdate(BaseModel):
    description: Optional[str] = Field(default=None, max_length=2000)


class BoardOut(BaseModel):
    id: str
    name: str
    description: Optional[str]
    customTitle: Optional[str]
    position: int
    owner: str
    lists: list[Any]
    createdAt: datetime
    updatedAt: datetime


class BoardMessage(BaseModel):
    message: str
    board: BoardOut


class ListCreate(BaseModel):
    title: Optional[str] = None


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
