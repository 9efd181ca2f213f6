import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from database import get_session
from middleware.auth import verify_jwt_middleware
from models import TaskPriority, TaskStatus
from schemas import (
    DeleteResponse,
    PaginatedTasks,
    TaskCreate,
    TaskFilter,
    TaskResponse,
    TaskUpdate,
)
from services.task_service import DEFAULT_PAGE_SIZE, TaskService

router = APIRouter(prefix="/task")


@router.post("/create", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> TaskResponse:
    """
    Create a new task owned by the authenticated user

    Args:
        task_data: Task creation data
        user_id: Authenticated user ID
        session: Database session

    Returns:
        Created task
    """
    task = TaskService(session).create_task(user_id, task_data)
    return TaskResponse.model_validate(task)


@router.put("/update/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: uuid.UUID,
    task_data: TaskUpdate,
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> TaskResponse:
    """
    Update a task; only the fields present in the body change

    Args:
        task_id: Task ID
        task_data: Partial task data
        user_id: Authenticated user ID
        session: Database session

    Returns:
        Updated task
    """
    task = TaskService(session).update_task(user_id, task_id, task_data)
    return TaskResponse.model_validate(task)


@router.get("/getAll", response_model=PaginatedTasks)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = Query(None),
    due_date_from: Optional[datetime] = Query(None, alias="dueDateFrom"),
    due_date_to: Optional[datetime] = Query(None, alias="dueDateTo"),
    sort_by: Optional[str] = Query("createdAt", alias="sortBy"),
    sort_order: Optional[str] = Query("desc", alias="sortOrder"),
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> PaginatedTasks:
    """
    List the authenticated user's tasks with filters, sorting and pagination

    Filters: status, priority, dueDateFrom, dueDateTo (inclusive).
    Sorting: sortBy in title, dueDate, priority, status (default createdAt),
    sortOrder asc or desc (default desc).
    """
    filters = TaskFilter(
        status=status_filter,
        priority=priority,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page_number=page_number,
        page_size=page_size,
    )
    return TaskService(session).list_tasks(user_id, filters)


@router.get("/getById/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> TaskResponse:
    """Get task details; tasks of other users are reported as not found"""
    task = TaskService(session).get_task(user_id, task_id)
    return TaskResponse.model_validate(task)


@router.delete("/delete/{task_id}", response_model=DeleteResponse)
def delete_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> DeleteResponse:
    """
    Delete a task

    Deleting a missing or foreign task is not an error; the response
    reports deleted=false.
    """
    deleted = TaskService(session).delete_task(user_id, task_id)
    return DeleteResponse(deleted=deleted)
