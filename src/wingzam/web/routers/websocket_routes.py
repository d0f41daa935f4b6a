"""WebSocket routes for live listening sessions."""

import asyncio
import json
import logging
from typing import Annotated, Any

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from wingzam.session.controller import SessionController
from wingzam.session.messages import (
    apply_client_message,
    error_message,
    parse_client_message,
    state_message,
)
from wingzam.web.core.container import Container

logger = logging.getLogger(__name__)

router = APIRouter()


async def _send_messages(websocket: WebSocket, outbox: asyncio.Queue[dict[str, Any]]) -> None:
    """Forward queued messages to the client in order."""
    while True:
        message = await outbox.get()
        await websocket.send_json(message)


@router.websocket("/session")
@inject
async def session_websocket_endpoint(
    websocket: WebSocket,
    controller: Annotated[SessionController, Depends(Provide[Container.session_controller])],
) -> None:
    """Drive one listening session from browser speech recognition events.

    Each connection owns its own session. Every state change is pushed to the client
    as a ``state`` message; the session is torn down when the client disconnects.
    """
    await websocket.accept()
    outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
    controller.subscribe(lambda snapshot: outbox.put_nowait(state_message(snapshot)))
    outbox.put_nowait(state_message(controller.snapshot()))
    sender = asyncio.create_task(_send_messages(websocket, outbox))

    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))
            raw = frame.get("text")
            if raw is None:
                logger.debug("Rejected binary session frame")
                outbox.put_nowait(error_message("Malformed session message"))
                continue
            try:
                message = parse_client_message(json.loads(raw))
            except (ValueError, ValidationError) as e:
                logger.debug("Rejected session message: %s", e)
                outbox.put_nowait(error_message("Malformed session message"))
                continue
            apply_client_message(controller, message)
    except WebSocketDisconnect:
        logger.info("Session WebSocket client disconnected")
    finally:
        controller.close()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
