"""Task access layer.

Every read and write is scoped to a single owner. Ownership is checked by
loading the record and comparing owners (``load_owned_task``) rather than by
filtering the query, so a missing task (404) and a foreign task (401) stay
distinguishable.
"""
from dataclasses import dataclass
from datetime import datetime, time
from typing import List, Optional
import uuid

from sqlalchemy import false
from sqlmodel import Session, select

from ..core.errors import InvalidInputError, NotAuthorizedError, NotFoundError
from ..models.task import Task, TaskCategory
from ..models.user import User, utcnow
from ..schemas.task import TaskCreate, TaskUpdate, parse_due_date

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass
class TaskFilters:
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None
    completed: Optional[str] = None


def parse_date_param(name: str, value: str) -> datetime:
    try:
        return parse_due_date(value)
    except ValueError:
        raise InvalidInputError(f"Invalid {name}: {value}")


def day_bounds(value: datetime):
    """Inclusive [00:00:00.000, 23:59:59.999] bounds of the calendar day."""
    day = value.date()
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def build_task_query(owner_id: uuid.UUID, filters: TaskFilters, dialect_name: str = "sqlite"):
    statement = select(Task).where(Task.owner_id == owner_id)

    # A full range wins over a single date
    if filters.start_date and filters.end_date:
        start = parse_date_param("startDate", filters.start_date)
        end = parse_date_param("endDate", filters.end_date)
        statement = statement.where(Task.due_date >= start, Task.due_date <= end)
    elif filters.date:
        start, end = day_bounds(parse_date_param("date", filters.date))
        statement = statement.where(Task.due_date >= start, Task.due_date <= end)

    if filters.category is not None:
        try:
            category = TaskCategory(filters.category)
        except ValueError:
            # Exact match: an unknown category matches nothing
            statement = statement.where(false())
        else:
            statement = statement.where(Task.category == category)

    if filters.completed is not None:
        statement = statement.where(Task.completed == (filters.completed == "true"))

    # Start times compare as raw strings; PostgreSQL needs the byte-order collation
    start_time = Task.start_time.collate("C") if dialect_name == "postgresql" else Task.start_time
    return statement.order_by(Task.due_date, start_time)


def list_tasks(session: Session, owner: User, filters: TaskFilters) -> List[Task]:
    dialect_name = session.get_bind().dialect.name
    return list(session.exec(build_task_query(owner.id, filters, dialect_name)).all())


def load_owned_task(session: Session, owner: User, task_id: str) -> Task:
    try:
        key = uuid.UUID(str(task_id))
    except ValueError:
        raise NotFoundError(f"Task not found with id of {task_id}")

    task = session.get(Task, key)
    if not task:
        raise NotFoundError(f"Task not found with id of {task_id}")
    if task.owner_id != owner.id:
        raise NotAuthorizedError("Not authorized to access this task")
    return task


def create_task(session: Session, owner: User, task_create: TaskCreate) -> Task:
    db_task = Task(**task_create.model_dump(), owner_id=owner.id)
    session.add(db_task)
    session.commit()
    session.refresh(db_task)
    return db_task


def update_task(session: Session, owner: User, task_id: str, task_update: TaskUpdate) -> Task:
    task = load_owned_task(session, owner, task_id)

    task_data = task_update.model_dump(exclude_unset=True)
    for key, value in task_data.items():
        setattr(task, key, value)

    task.updated_at = utcnow()
    session.add(task)
    session.commit()
    session.refresh(task)
    return task


def delete_task(session: Session, owner: User, task_id: str) -> None:
    task = load_owned_task(session, owner, task_id)
    session.delete(task)
    session.commit()


def toggle_task(session: Session, owner: User, task_id: str) -> Task:
    task = load_owned_task(session, owner, task_id)

    task.completed = not task.completed
    task.updated_at = utcnow()
    session.add(task)
    session.commit()
    session.refresh(task)
    return task
