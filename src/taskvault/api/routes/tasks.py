"""
Task API routes for TaskVault
CRUD and paginated search over the authenticated user's tasks
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ...database.database import get_session
from ...models.task import TaskCreate, TaskStatus, TaskUpdate
from ...security.cipher import FieldCipher
from ...security.tokens import SessionIdentity
from ...services.task_service import TaskService
from ...utils.errors import ValidationFailedError
from ..deps import get_current_user, get_field_cipher
from ..responses import ok


router = APIRouter(prefix="/tasks", tags=["tasks"])

# Query validation constants
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10
MAX_SEARCH_LENGTH = 120


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: SessionIdentity = Depends(get_current_user),
    session: Session = Depends(get_session),
    cipher: FieldCipher = Depends(get_field_cipher),
):
    """
    Create a new task for the authenticated user.

    Args:
        task_data: Title, description and optional status
        current_user: Currently authenticated user
        session: Database session
        cipher: Cipher for the description

    Returns:
        201 with the created task
    """
    task = TaskService.create_task(db=session, cipher=cipher, identity=current_user, task_data=task_data)
    return ok({"task": task}, status.HTTP_201_CREATED)


@router.get("")
def list_tasks(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    current_user: SessionIdentity = Depends(get_current_user),
    session: Session = Depends(get_session),
    cipher: FieldCipher = Depends(get_field_cipher),
):
    """
    Get one page of the authenticated user's tasks, newest first.

    Args:
        page: 1-based page number
        limit: Page size (1-50)
        task_status: Only return tasks with this status
        search: Only return tasks whose title contains this text (case-insensitive)

    Returns:
        Tasks and pagination metadata
    """
    if search is not None:
        search = search.strip()
        if len(search) > MAX_SEARCH_LENGTH:
            raise ValidationFailedError()

    task_page = TaskService.list_tasks(
        db=session,
        cipher=cipher,
        identity=current_user,
        page=page,
        limit=limit,
        status=task_status,
        search=search or None,
    )
    return ok(task_page)


@router.get("/{task_id}")
def get_task(
    task_id: str,
    current_user: SessionIdentity = Depends(get_current_user),
    session: Session = Depends(get_session),
    cipher: FieldCipher = Depends(get_field_cipher),
):
    task = TaskService.get_task(db=session, cipher=cipher, identity=current_user, task_id=task_id)
    return ok({"task": task})


@router.put("/{task_id}")
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: SessionIdentity = Depends(get_current_user),
    session: Session = Depends(get_session),
    cipher: FieldCipher = Depends(get_field_cipher),
):
    """
    Update some of a task's fields. Fields left out of the body are unchanged.

    Raises:
        TaskNotFoundException 404: No task with this ID
        ForbiddenError 403: The task belongs to another user
    """
    task = TaskService.update_task(
        db=session,
        cipher=cipher,
        identity=current_user,
        task_id=task_id,
        task_data=task_data,
    )
    return ok({"task": task})


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    current_user: SessionIdentity = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    TaskService.delete_task(db=session, identity=current_user, task_id=task_id)
    return ok({"message": "Task deleted"})
