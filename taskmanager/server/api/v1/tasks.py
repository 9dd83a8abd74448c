"""
API endpoints for the caller's tasks.

Every route is authenticated and scoped to the caller: a task owned by
someone else behaves exactly like a missing one.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from taskmanager.core.models.io import TaskCreate, TaskRead, TaskUpdate
from taskmanager.server.services.deps import MAX_ROW_ID, CurrentUserDep, ReposDep, RowId
from taskmanager.server.services.tasks import TaskService, build_task_query

router = APIRouter(tags=["tasks"])


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a task owned by the authenticated user.",
    responses={
        201: {"description": "Task created"},
        400: {"description": "Invalid task data"},
        401: {"description": "Please authenticate."},
    },
)
async def create_task(payload: TaskCreate, user: CurrentUserDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).create(user.id, payload)
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=List[TaskRead],
    summary="List Tasks",
    description="List the caller's tasks with optional completion filter, sorting and pagination.",
    responses={
        200: {"description": "Matching tasks"},
        400: {"description": "Invalid query parameters"},
        401: {"description": "Please authenticate."},
    },
)
async def list_tasks(
    user: CurrentUserDep,
    repos: ReposDep,
    completed: Optional[bool] = Query(None, description="Only tasks with this completion state"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_ROW_ID, description="Maximum number of tasks to return"),
    skip: Optional[int] = Query(None, ge=0, le=MAX_ROW_ID, description="Number of tasks to skip"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="field[:asc|desc], e.g. createdAt:desc"),
) -> List[TaskRead]:
    """
    List tasks.

    - **completed**: `true` or `false` to filter by completion.
    - **limit** / **skip**: Page size and offset.
    - **sortBy**: One of `created_at`, `updated_at`, `description`, `completed`
      (or `createdAt` / `updatedAt`), optionally followed by `:asc` or `:desc`.
    """
    query = build_task_query(completed=completed, limit=limit, skip=skip, sort_by=sort_by)
    tasks = await TaskService(repos).list(query, owner_id=user.id)
    return [TaskRead.model_validate(task) for task in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get Task",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
async def get_task(task_id: RowId, user: CurrentUserDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).get(task_id, owner_id=user.id)
    return TaskRead.model_validate(task)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update Task",
    description="Update the description or completion state of one of the caller's tasks.",
    responses={
        200: {"description": "Task updated"},
        400: {"description": "Invalid update"},
        404: {"description": "Task not found"},
    },
)
async def update_task(task_id: RowId, changes: TaskUpdate, user: CurrentUserDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).update(task_id, changes, owner_id=user.id)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    response_model=TaskRead,
    summary="Delete Task",
    description="Delete one of the caller's tasks and return it.",
    responses={
        200: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(task_id: RowId, user: CurrentUserDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).delete(task_id, owner_id=user.id)
    return TaskRead.model_validate(task)
