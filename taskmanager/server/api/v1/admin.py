"""
Admin API endpoints.

Unscoped user and task management for admin users. Non-admin callers get
401 "No access.", unauthenticated callers 401 "Please authenticate.".
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from taskmanager.core.logging_config import get_logger
from taskmanager.core.models.io import TaskRead, TaskUpdate, UserRead, UserUpdate
from taskmanager.server.services.accounts import AccountService
from taskmanager.server.services.deps import MAX_ROW_ID, AdminDep, ReposDep, RowId
from taskmanager.server.services.tasks import TaskService, build_task_query

logger = get_logger(__name__)

router = APIRouter(tags=["admin"])

_ADMIN_RESPONSES = {401: {"description": "Please authenticate. / No access."}}


@router.get(
    "/users",
    response_model=List[UserRead],
    summary="List Users",
    description="List every user account.",
    responses=_ADMIN_RESPONSES,
)
async def list_users(
    admin: AdminDep,
    repos: ReposDep,
    limit: Optional[int] = Query(None, ge=1, le=MAX_ROW_ID),
    skip: Optional[int] = Query(None, ge=0, le=MAX_ROW_ID),
) -> List[UserRead]:
    users = await repos.users.list(limit=limit, offset=skip)
    return [UserRead.model_validate(user) for user in users]


@router.get(
    "/users/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={**_ADMIN_RESPONSES, 404: {"description": "User not found"}},
)
async def get_user(user_id: RowId, admin: AdminDep, repos: ReposDep) -> UserRead:
    user = await AccountService(repos).get_user(user_id)
    return UserRead.model_validate(user)


@router.patch(
    "/users/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Update any user's profile with the same rules as PATCH /users/me.",
    responses={**_ADMIN_RESPONSES, 400: {"description": "Invalid update"}, 404: {"description": "User not found"}},
)
async def update_user(user_id: RowId, changes: UserUpdate, admin: AdminDep, repos: ReposDep) -> UserRead:
    service = AccountService(repos)
    user = await service.get_user(user_id)
    updated = await service.update_profile(user, changes)
    return UserRead.model_validate(updated)


@router.delete(
    "/users/{user_id}",
    response_model=UserRead,
    summary="Delete User",
    description="Delete a user together with their tasks and tokens.",
    responses={**_ADMIN_RESPONSES, 404: {"description": "User not found"}},
)
async def delete_user(user_id: RowId, admin: AdminDep, repos: ReposDep) -> UserRead:
    service = AccountService(repos)
    user = await service.get_user(user_id)
    profile = UserRead.model_validate(user)
    await service.delete_user(user)
    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return profile


@router.get(
    "/tasks",
    response_model=List[TaskRead],
    summary="List All Tasks",
    description="List tasks of every owner with the same filters as GET /tasks.",
    responses={**_ADMIN_RESPONSES, 400: {"description": "Invalid query parameters"}},
)
async def list_all_tasks(
    admin: AdminDep,
    repos: ReposDep,
    completed: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=MAX_ROW_ID),
    skip: Optional[int] = Query(None, ge=0, le=MAX_ROW_ID),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
) -> List[TaskRead]:
    query = build_task_query(completed=completed, limit=limit, skip=skip, sort_by=sort_by)
    tasks = await TaskService(repos).list(query)
    return [TaskRead.model_validate(task) for task in tasks]


@router.get(
    "/tasks/{task_id}",
    response_model=TaskRead,
    summary="Get Any Task",
    responses={**_ADMIN_RESPONSES, 404: {"description": "Task not found"}},
)
async def get_any_task(task_id: RowId, admin: AdminDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).get(task_id)
    return TaskRead.model_validate(task)


@router.patch(
    "/tasks/{task_id}",
    response_model=TaskRead,
    summary="Update Any Task",
    responses={**_ADMIN_RESPONSES, 400: {"description": "Invalid update"}, 404: {"description": "Task not found"}},
)
async def update_any_task(task_id: RowId, changes: TaskUpdate, admin: AdminDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).update(task_id, changes)
    return TaskRead.model_validate(task)


@router.delete(
    "/tasks/{task_id}",
    response_model=TaskRead,
    summary="Delete Any Task",
    responses={**_ADMIN_RESPONSES, 404: {"description": "Task not found"}},
)
async def delete_any_task(task_id: RowId, admin: AdminDep, repos: ReposDep) -> TaskRead:
    task = await TaskService(repos).delete(task_id)
    return TaskRead.model_validate(task)
