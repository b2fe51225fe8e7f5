from __future__ import annotations

from fastapi import APIRouter, WebSocket

from ..session import ConnectionSession

router = APIRouter()


@router.websocket("/ws")
async def ws_detect(websocket: WebSocket):
    """
    WebSocket endpoint for detection requests.

    Protocol:
      Client -> Server : "ping" | "data:image/...;base64,<payload>"
      Server -> Client : "pong" | JSON array of {"class", "confidence"}
    """
    ctx = websocket.app.state.context
    await ConnectionSession(websocket, ctx.backend).run()
