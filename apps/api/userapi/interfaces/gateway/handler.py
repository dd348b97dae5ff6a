"""
API-gateway proxy adapter.

Takes a Lambda-style proxy event (`httpMethod`, `body`, `queryStringParameters`)
and returns a proxy response (`statusCode`, `headers`, `body`), routing on the
HTTP method the same way the `/users` router does.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

from fastapi import status

from userapi.application import user_repository
from userapi.core.domain.errors import (
    InvalidDataError,
    UserNotFoundError,
    UserRepositoryError,
)
from userapi.core.domain.user import User
from userapi.core.ports.record_store import RecordStore
from userapi.infrastructure.store import connection as store_conn
from userapi.interfaces.api.errors import INTERNAL_ERROR, METHOD_NOT_ALLOWED, status_for
from userapi.interfaces.api.schemas import ErrorBody, UserPayload

logger = logging.getLogger("gateway")

JSON_HEADERS = {"Content-Type": "application/json"}


def _response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(payload),
    }


def _error(status_code: int, message: str) -> Dict[str, Any]:
    return _response(status_code, ErrorBody(error=message).model_dump())


def _dump(user: User) -> Dict[str, Any]:
    return UserPayload.from_user(user).model_dump(by_alias=True)


def _body(event: Dict[str, Any]) -> Optional[bytes]:
    body = event.get("body")
    if body is None:
        return None
    try:
        if event.get("isBase64Encoded"):
            return base64.b64decode(body, validate=True)
        return body.encode("utf-8") if isinstance(body, str) else body
    except (binascii.Error, UnicodeEncodeError, ValueError, TypeError) as exc:
        raise InvalidDataError() from exc


def _query_email(event: Dict[str, Any]) -> str:
    params = event.get("queryStringParameters") or {}
    return params.get("email") or ""


def _get(store: RecordStore, table: str, event: Dict[str, Any]) -> Dict[str, Any]:
    email = _query_email(event)
    if email:
        user = user_repository.fetch_user(store, email, table)
        if not user.exists:
            raise UserNotFoundError()
        return _response(status.HTTP_200_OK, _dump(user))
    users = user_repository.fetch_users(store, table)
    return _response(status.HTTP_200_OK, [_dump(u) for u in users])


def _post(store: RecordStore, table: str, event: Dict[str, Any]) -> Dict[str, Any]:
    user = user_repository.create_user(store, _body(event), table)
    return _response(status.HTTP_201_CREATED, _dump(user))


def _put(store: RecordStore, table: str, event: Dict[str, Any]) -> Dict[str, Any]:
    user = user_repository.update_user(store, _body(event), table)
    return _response(status.HTTP_200_OK, _dump(user))


def _delete(store: RecordStore, table: str, event: Dict[str, Any]) -> Dict[str, Any]:
    user_repository.delete_user(store, _query_email(event), table)
    return _response(status.HTTP_200_OK, {})


HANDLERS = {
    "GET": _get,
    "POST": _post,
    "PUT": _put,
    "DELETE": _delete,
}


def handle_event(
    event: Dict[str, Any],
    store: Optional[RecordStore] = None,
    table: Optional[str] = None,
) -> Dict[str, Any]:
    method = (event.get("httpMethod") or "").upper()
    handler = HANDLERS.get(method)
    if handler is None:
        logger.warning("Unhandled method", extra={"method": method})
        return _error(status.HTTP_405_METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)

    if store is None:
        store_conn.init_store()
        store = store_conn.get_store()
    table = table or store_conn.get_table()

    try:
        return handler(store, table, event)
    except UserRepositoryError as exc:
        logger.info(
            "Request rejected",
            extra={"method": method, "kind": exc.kind.name, "table": table},
        )
        return _error(status_for(exc.kind), exc.message)
    except Exception:
        logger.exception("Request failed", extra={"method": method, "table": table})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def lambda_handler(event: Dict[str, Any], _context: Any = None) -> Dict[str, Any]:
    return handle_event(event)
