"""
WebSocket chat channel.

One actor per connection: this handler's receive loop dispatches inbound
frames to the delivery coordinator one at a time, while a sender task drains
the connection's outbound queue to the socket.

Routes: WS /ws/chat

Client sends:
    {"event": "join_session", "data": {"sessionId": "..."}}
    {"event": "chat_message", "data": {"message": "..."}}
    {"event": "clear_session"}
    {"event": "get_session_info"}

Server sends:
    session_joined, message_received, message_stream, bot_typing,
    session_cleared, session_info, system_message, error

Dependencies: newsbot.application.services.delivery_service
System role: WebSocket streaming API
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from newsbot.api.deps import get_ws_delivery_coordinator
from newsbot.application.services.delivery_service import Connection, DeliveryCoordinator

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


async def _drain_outbox(websocket: WebSocket, connection: Connection) -> None:
    """Send queued events to the socket in order until cancelled."""
    while True:
        event = await connection.outbox.get()
        await websocket.send_json(event.to_dict())


@router.websocket("/ws/chat")
async def websocket_chat(
    websocket: WebSocket,
    coordinator: DeliveryCoordinator = Depends(get_ws_delivery_coordinator),
) -> None:
    """
    WebSocket endpoint for session chat.

    Args:
        websocket: WebSocket connection
        coordinator: Shared delivery coordinator
    """
    await websocket.accept()
    connection = await coordinator.connect()
    sender = asyncio.create_task(_drain_outbox(websocket, connection))

    logger.info(
        "WebSocket connection established",
        extra={"connection_id": connection.connection_id, "client_host": websocket.client},
    )

    try:
        while True:
            raw_data = await websocket.receive_text()
            logger.debug(
                "Raw WebSocket message received",
                extra={"connection_id": connection.connection_id, "raw_data_length": len(raw_data)},
            )
            await coordinator.handle_message(connection, raw_data)
    except WebSocketDisconnect:
        logger.info(
            "WebSocket client disconnected",
            extra={"connection_id": connection.connection_id, "session_id": connection.session_id},
        )
    except Exception as e:
        logger.exception(
            "Unexpected error in WebSocket handler",
            extra={
                "connection_id": connection.connection_id,
                "error_type": type(e).__name__,
                "error_msg": str(e),
            },
        )
    finally:
        await coordinator.disconnect(connection.connection_id)
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Sender task ended with {type(e).__name__}", extra={"connection_id": connection.connection_id})
