"""
Task business logic: ownership-scoped CRUD and the filtered, sorted, paged listing.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import case, func
from sqlmodel import Session, select

from errors import NotFoundError
from models import Task, TaskPriority, TaskStatus, utc_now
from schemas import PaginatedTasks, TaskCreate, TaskFilter, TaskUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Fields that cannot be cleared by a partial update
REQUIRED_FIELDS = ("title", "status", "priority")

PRIORITY_RANK = case(
    (Task.priority == TaskPriority.LOW, 1),
    (Task.priority == TaskPriority.MEDIUM, 2),
    else_=3,
)

STATUS_RANK = case(
    (Task.status == TaskStatus.PENDING, 1),
    (Task.status == TaskStatus.IN_PROGRESS, 2),
    else_=3,
)

SORT_COLUMNS = {
    "title": Task.title,
    "duedate": Task.due_date,
    "priority": PRIORITY_RANK,
    "status": STATUS_RANK,
    "createdat": Task.created_at,
}


def clamp_paging(page_number: Optional[int], page_size: Optional[int]):
    """Page number at least 1, page size within 1..100."""
    page_number = max(page_number or 1, 1)
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page_number, page_size


def sort_expression(sort_by: Optional[str], sort_order: Optional[str]):
    """Single ORDER BY term; unknown keys fall back to created_at, unknown directions to desc."""
    column = SORT_COLUMNS.get((sort_by or "").strip().lower(), Task.created_at)
    if (sort_order or "").strip().lower() == "asc":
        return column.asc()
    return column.desc()


class TaskService:
    """Service for task business logic."""

    def __init__(self, session: Session):
        self.session = session

    def _get_owned(self, user_id: uuid.UUID, task_id: uuid.UUID) -> Optional[Task]:
        query = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        return self.session.exec(query).first()

    def create_task(self, user_id: uuid.UUID, data: TaskCreate) -> Task:
        now = utc_now()
        task = Task(
            user_id=user_id,
            title=data.title,
            description=data.description or None,
            due_date=data.due_date,
            status=data.status,
            priority=data.priority,
            created_at=now,
            updated_at=now,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info("Task %s created for user %s", task.id, user_id)
        return task

    def get_task(self, user_id: uuid.UUID, task_id: uuid.UUID) -> Task:
        task = self._get_owned(user_id, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def list_tasks(self, user_id: uuid.UUID, filters: TaskFilter) -> PaginatedTasks:
        page_number, page_size = clamp_paging(filters.page_number, filters.page_size)

        conditions = [Task.user_id == user_id]
        if filters.status is not None:
            conditions.append(Task.status == filters.status)
        if filters.priority is not None:
            conditions.append(Task.priority == filters.priority)
        if filters.due_date_from is not None:
            conditions.append(Task.due_date >= filters.due_date_from)
        if filters.due_date_to is not None:
            conditions.append(Task.due_date <= filters.due_date_to)

        total_count = self.session.exec(
            select(func.count()).select_from(Task).where(*conditions)
        ).one()

        query = (
            select(Task)
            .where(*conditions)
            .order_by(sort_expression(filters.sort_by, filters.sort_order))
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        tasks = self.session.exec(query).all()

        return PaginatedTasks.build(tasks, total_count, page_number, page_size)

    def update_task(self, user_id: uuid.UUID, task_id: uuid.UUID, data: TaskUpdate) -> Task:
        task = self._get_owned(user_id, task_id)
        if task is None:
            raise NotFoundError("Task not found")

        for field, value in data.model_dump(exclude_unset=True).items():
            if field in REQUIRED_FIELDS and (value is None or value == ""):
                continue
            if field == "description" and value == "":
                value = None
            setattr(task, field, value)

        task.updated_at = utc_now()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info("Task %s updated for user %s", task.id, user_id)
        return task

    def delete_task(self, user_id: uuid.UUID, task_id: uuid.UUID) -> bool:
        task = self._get_owned(user_id, task_id)
        if task is None:
            logger.info("Delete skipped: task %s not found for user %s", task_id, user_id)
            return False

        self.session.delete(task)
        self.session.commit()

        logger.info("Task %s deleted for user %s", task_id, user_id)
        return True
