from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool

from userapi.application import user_repository
from userapi.core.domain.errors import UserNotFoundError
from userapi.core.ports.record_store import RecordStore
from userapi.infrastructure.store import connection as store_conn
from userapi.interfaces.api.schemas import UserPayload

router = APIRouter()


@router.get("/users/health")
def users_health() -> dict:
    """
    Lightweight liveness probe for user routes; does not touch the store.
    """
    return {"status": "ok"}


@router.get("/users", response_model=Union[UserPayload, List[UserPayload]])
def get_users(
    email: Optional[str] = Query(default=None),
    store: RecordStore = Depends(store_conn.get_store),
    table: str = Depends(store_conn.get_table),
):
    if email:
        user = user_repository.fetch_user(store, email, table)
        if not user.exists:
            raise UserNotFoundError()
        return UserPayload.from_user(user)
    users = user_repository.fetch_users(store, table)
    return [UserPayload.from_user(u) for u in users]


@router.post(
    "/users", response_model=UserPayload, status_code=status.HTTP_201_CREATED
)
async def create_user(
    request: Request,
    store: RecordStore = Depends(store_conn.get_store),
    table: str = Depends(store_conn.get_table),
):
    body = await request.body()
    user = await run_in_threadpool(user_repository.create_user, store, body, table)
    return UserPayload.from_user(user)


@router.put("/users", response_model=UserPayload)
async def update_user(
    request: Request,
    store: RecordStore = Depends(store_conn.get_store),
    table: str = Depends(store_conn.get_table),
):
    body = await request.body()
    user = await run_in_threadpool(user_repository.update_user, store, body, table)
    return UserPayload.from_user(user)


@router.delete("/users")
def delete_user(
    email: str = Query(default=""),
    store: RecordStore = Depends(store_conn.get_store),
    table: str = Depends(store_conn.get_table),
) -> dict:
    user_repository.delete_user(store, email, table)
    return {}
