"""
Task service module for TaskVault
Handles ownership-checked task operations; descriptions are encrypted at rest
"""
import math
from typing import Optional

from sqlalchemy import String
from sqlmodel import Session, select, func

from ..models.task import Task, TaskCreate, TaskUpdate, TaskPublic, TaskStatus, TaskPage, Pagination
from ..security.cipher import FieldCipher
from ..security.tokens import SessionIdentity
from ..utils.errors import AppError, ForbiddenError, TaskNotFoundException
from ..utils.logging import get_logger, log_error
from ..utils.timestamps import utc_now

logger = get_logger(__name__)

# Largest OFFSET sent to the store; no table holds more rows than this
MAX_OFFSET = 2 ** 62


class TaskService:
    """Service class for task operations scoped to the requesting user"""

    @staticmethod
    def _to_public(task: Task, cipher: FieldCipher) -> TaskPublic:
        return TaskPublic(
            id=task.id,
            title=task.title,
            description=cipher.decrypt(task.description),
            status=task.status,
            owner_id=task.owner_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    @staticmethod
    def _get_owned_task(db: Session, identity: SessionIdentity, task_id: str) -> Task:
        """
        Fetch a task and check that the requester owns it.

        Raises:
            TaskNotFoundException: If no task has this ID
            ForbiddenError: If the task belongs to another user
        """
        task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundException(task_id)
        if task.owner_id != identity.user_id:
            logger.warning("User %s denied access to task %s", identity.user_id, task_id)
            raise ForbiddenError()
        return task

    @staticmethod
    def create_task(
        db: Session,
        cipher: FieldCipher,
        identity: SessionIdentity,
        task_data: TaskCreate
    ) -> TaskPublic:
        """
        Create a new task owned by the requester.

        Args:
            db: Database session
            cipher: Cipher used to encrypt the description
            identity: Authenticated requester
            task_data: Validated task fields

        Returns:
            The created task with its description in plaintext
        """
        try:
            task = Task(
                title=task_data.title,
                description=cipher.encrypt(task_data.description),
                status=task_data.status,
                owner_id=identity.user_id,
            )
            db.add(task)
            db.commit()
            db.refresh(task)

            logger.info("User %s created task %s", identity.user_id, task.id)
            return TaskService._to_public(task, cipher)
        except AppError:
            raise
        except Exception as e:
            log_error(e, "TaskService.create_task", identity.user_id)
            db.rollback()
            raise

    @staticmethod
    def get_task(
        db: Session,
        cipher: FieldCipher,
        identity: SessionIdentity,
        task_id: str
    ) -> TaskPublic:
        task = TaskService._get_owned_task(db, identity, task_id)
        return TaskService._to_public(task, cipher)

    @staticmethod
    def update_task(
        db: Session,
        cipher: FieldCipher,
        identity: SessionIdentity,
        task_id: str,
        task_data: TaskUpdate
    ) -> TaskPublic:
        """
        Apply a partial update to a task.

        Only fields present in task_data are written. The stored description
        ciphertext is replaced only when a new description is supplied.

        Raises:
            TaskNotFoundException: If no task has this ID
            ForbiddenError: If the task belongs to another user
        """
        task = TaskService._get_owned_task(db, identity, task_id)
        try:
            changes = task_data.changes()
            if "description" in changes:
                changes["description"] = cipher.encrypt(changes["description"])
            for field, value in changes.items():
                setattr(task, field, value)

            task.updated_at = utc_now()

            db.add(task)
            db.commit()
            db.refresh(task)

            logger.info("User %s updated task %s (%s)", identity.user_id, task_id, ", ".join(sorted(changes)))
            return TaskService._to_public(task, cipher)
        except AppError:
            raise
        except Exception as e:
            log_error(e, f"TaskService.update_task (id={task_id})", identity.user_id)
            db.rollback()
            raise

    @staticmethod
    def delete_task(db: Session, identity: SessionIdentity, task_id: str) -> None:
        task = TaskService._get_owned_task(db, identity, task_id)
        try:
            db.delete(task)
            db.commit()
            logger.info("User %s deleted task %s", identity.user_id, task_id)
        except Exception as e:
            log_error(e, f"TaskService.delete_task (id={task_id})", identity.user_id)
            db.rollback()
            raise

    @staticmethod
    def list_tasks(
        db: Session,
        cipher: FieldCipher,
        identity: SessionIdentity,
        page: int = 1,
        limit: int = 10,
        status: Optional[TaskStatus] = None,
        search: Optional[str] = None
    ) -> TaskPage:
        """
        Get one page of the requester's tasks, newest first.

        page and limit are expected to be validated already (page >= 1,
        1 <= limit <= 50). The total and the page are read by one
        statement so they always describe the same set of rows.

        Args:
            db: Database session
            cipher: Cipher used to decrypt descriptions
            identity: Authenticated requester
            page: 1-based page number
            limit: Page size
            status: Only return tasks with this status
            search: Only return tasks whose title contains this text, ignoring case

        Returns:
            TaskPage with the tasks and pagination metadata
        """
        conditions = [Task.owner_id == identity.user_id]
        if status is not None:
            conditions.append(Task.status == status)
        if search:
            conditions.append(func.lower(Task.title, type_=String).contains(search.lower(), autoescape=True))

        offset = (page - 1) * limit
        # The window count is computed over the filtered rows before OFFSET/LIMIT,
        # so the page and its total come from one statement and one snapshot
        statement = (
            select(Task, func.count().over().label("total"))
            .where(*conditions)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .offset(offset)
            .limit(limit)
        )
        count_statement = select(func.count()).select_from(Task).where(*conditions)

        try:
            rows = db.exec(statement).all() if offset <= MAX_OFFSET else []
            tasks = [task for task, _ in rows]
            if rows:
                total = rows[0][1]
            else:
                # Past the last page; still report the size of the filtered set
                total = db.exec(count_statement).one()
        except Exception as e:
            log_error(e, "TaskService.list_tasks", identity.user_id)
            raise

        return TaskPage(
            tasks=[TaskService._to_public(task, cipher) for task in tasks],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )
