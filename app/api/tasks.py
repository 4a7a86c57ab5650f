"""Task API endpoints: bin audits, corrections and other follow-up work."""
from typing import Optional

from fastapi import APIRouter, Query, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import utcnow
from app.core.dependencies import CurrentPrincipal, DbSession, Principal
from app.core.enums import TaskPriority, TaskStatus, UserRole
from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.core.logging import get_logger
from app.models.pick_issue import Task
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse


router = APIRouter()
logger = get_logger(__name__)

MANAGER_ROLES = (UserRole.SUPERVISOR.value, UserRole.ADMIN.value)


def _is_manager(principal: Principal) -> bool:
    return principal.role in MANAGER_ROLES


async def get_task_or_404(db: AsyncSession, task_id: str, principal: Principal) -> Task:
    """Pickers only see their own tasks; supervisors and admins see all of them."""
    query = select(Task).where(Task.id == task_id)
    if not _is_manager(principal):
        query = query.where(Task.user_id == principal.user_id)

    result = await db.execute(query)
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError(f"Task not found with id of {task_id}")
    return task


@router.get("", response_model=PaginatedResponse[TaskResponse])
async def list_tasks(
    principal: CurrentPrincipal,
    db: DbSession,
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """List the caller's tasks, newest first."""
    query = select(Task).where(Task.user_id == principal.user_id)
    if status_filter:
        query = query.where(Task.status == status_filter)
    if priority:
        query = query.where(Task.priority == priority)

    count_result = await db.execute(
        select(func.count()).select_from(query.subquery())
    )
    total = count_result.scalar() or 0

    offset = (page - 1) * limit
    result = await db.execute(
        query.order_by(Task.created_at.desc(), Task.id).offset(offset).limit(limit)
    )
    tasks = result.scalars().all()

    return PaginatedResponse.build(
        [TaskResponse.model_validate(t) for t in tasks],
        total=total, page=page, page_size=limit,
    )


@router.post("", response_model=ApiResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
async def create_task(
    request: TaskCreate,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Create a task for the caller, or for another user when the caller manages the floor."""
    assignee = request.user_id or principal.user_id
    if assignee != principal.user_id and not _is_manager(principal):
        raise PermissionDeniedError("Only supervisors can assign tasks to other users")

    task = Task(
        title=request.title,
        description=request.description,
        user_id=assignee,
        order_id=request.order_id,
        status=TaskStatus.PENDING,
        priority=request.priority,
        due_date=request.due_date,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)

    logger.info(
        f"Task created: {task.title}",
        extra={"user_id": assignee, "order_id": task.order_id},
    )
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse])
async def update_task(
    task_id: str,
    request: TaskUpdate,
    principal: CurrentPrincipal,
    db: DbSession,
):
    task = await get_task_or_404(db, task_id, principal)

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(task, field, value)

    if request.status == TaskStatus.COMPLETED and task.completed_at is None:
        task.completed_at = utcnow()

    await db.commit()
    await db.refresh(task)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=ApiResponse[TaskResponse])
async def delete_task(
    task_id: str,
    principal: CurrentPrincipal,
    db: DbSession,
):
    task = await get_task_or_404(db, task_id, principal)
    data = TaskResponse.model_validate(task)

    await db.delete(task)
    await db.commit()

    logger.info(f"Task {task_id} deleted", extra={"user_id": principal.user_id})
    return ApiResponse(data=data, message="Task deleted")
