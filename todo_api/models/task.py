from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime
import uuid
from enum import Enum

from .user import utcnow


class TaskCategory(str, Enum):
    idea = "Idea"
    food = "Food"
    work = "Work"
    sport = "Sport"
    music = "Music"
    other = "Other"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(max_length=100, nullable=False)
    description: str = Field(nullable=False)
    # Naive, server-local wall clock
    due_date: datetime = Field(sa_column=Column(DateTime(timezone=False), index=True, nullable=False))
    start_time: str = Field(nullable=False)
    end_time: str = Field(nullable=False)
    category: TaskCategory = Field(default=TaskCategory.other)
    completed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    # Relationship to user
    owner: Optional["User"] = Relationship(back_populates="tasks")
