from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ....db.session import get_session
from ....models.user import User
from ....schemas.base import EmptyResponse
from ....schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate
from ....services import tasks as task_service
from ...deps import get_current_user

# The auth gate runs before every task handler
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=TaskListResponse)
def list_user_tasks(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    date: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    completed: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    filters = task_service.TaskFilters(
        start_date=start_date,
        end_date=end_date,
        date=date,
        category=category,
        completed=completed,
    )
    tasks = task_service.list_tasks(session, current_user, filters)
    return {"success": True, "count": len(tasks), "data": tasks}


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = task_service.create_task(session, current_user, task_create)
    return {"success": True, "data": task}


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = task_service.load_owned_task(session, current_user, task_id)
    return {"success": True, "data": task}


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = task_service.update_task(session, current_user, task_id, task_update)
    return {"success": True, "data": task}


@router.delete("/{task_id}", response_model=EmptyResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task_service.delete_task(session, current_user, task_id)
    return {"success": True, "data": {}}


@router.put("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task_completion(
    task_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = task_service.toggle_task(session, current_user, task_id)
    return {"success": True, "data": task}
