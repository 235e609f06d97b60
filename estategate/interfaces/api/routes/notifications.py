"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import (
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from estategate.config import get_settings
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import SessionLocal, get_db
from estategate.infrastructure.notifications import (
    NotificationPoller,
    notification_manager,
    serialize_notification,
)
from estategate.infrastructure.repositories import NotificationRepository
from estategate.interfaces.api.dependencies import (
    build_session_context,
    get_session_context,
    resolve_current_user,
)
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import MarkAllReadResponse, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[NotificationRead])
def read_notifications(
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications(
        db, context=context, unread_only=unread_only, limit=limit
    )
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    return MarkAllReadResponse(updated=mark_all_notifications_read(db, context=context))


@router.post("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        notification = mark_notification_read(
            db, context=context, notification_id=notification_id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


def _authenticate(token: str) -> SessionContext:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        return build_session_context(user, session)
    finally:
        session.close()


def _load_unread(user_id: int) -> list[dict[str, Any]]:
    session = SessionLocal()
    try:
        notifications = NotificationRepository(session).list_for_user(
            user_id, unread_only=True
        )
        return [serialize_notification(notification) for notification in notifications]
    finally:
        session.close()


def _acknowledge(user_id: int, ids: list[int]) -> int:
    session = SessionLocal()
    try:
        return NotificationRepository(session).mark_as_read(ids, user_id=user_id)
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream the unread notifications of the authenticated user.

    A poller pushes a fresh ``snapshot`` every polling interval while the
    socket is open; new notifications are also pushed as they are created.
    Clients may send ``ping``, ``ack`` (with ``ids``) and ``refresh``. A
    failed manual refresh is logged and answered with an ``error`` message.
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        context = await run_in_threadpool(_authenticate, token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    user_id = context.user_id

    async def fetch() -> list[dict[str, Any]]:
        return await run_in_threadpool(_load_unread, user_id)

    async def deliver(snapshot: list[dict[str, Any]]) -> None:
        await websocket.send_json({"type": "snapshot", "data": snapshot})

    poller = NotificationPoller(
        fetch, deliver, interval=get_settings().notification_poll_interval_seconds
    )

    await notification_manager.connect(user_id, websocket)
    poller.start()
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                logger.debug("Ignoring malformed socket message from user %s", user_id)
                continue
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "refresh":
                try:
                    await poller.refresh()
                except WebSocketDisconnect:
                    raise
                except Exception:
                    logger.exception("Manual notification refresh failed for user %s", user_id)
                    await websocket.send_json({"type": "error", "reason": "refresh_failed"})
            elif message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ids = [item for item in ids if isinstance(item, int)]
                    updated = await run_in_threadpool(_acknowledge, user_id, ids)
                    await websocket.send_json({"type": "ack", "updated": updated})
    except WebSocketDisconnect:
        logger.debug("Notification socket closed for user %s", user_id)
    finally:
        await poller.stop()
        notification_manager.disconnect(user_id, websocket)
