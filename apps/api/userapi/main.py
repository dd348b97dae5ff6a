from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import os

from userapi.core.domain.errors import UserRepositoryError
from userapi.infrastructure.store import connection as store_conn
from userapi.interfaces.api.errors import method_not_allowed_handler, user_error_handler
from userapi.interfaces.api.routers import users


@asynccontextmanager
async def lifespan(_: FastAPI):
    store_conn.init_store()
    try:
        yield
    finally:
        store_conn.close_store()


app = FastAPI(title="User Store API", version="0.0.1", lifespan=lifespan)

frontend_origin = os.environ.get("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(UserRepositoryError, user_error_handler)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


app.include_router(users.router)
