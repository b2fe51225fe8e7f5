"""
Per-connection WebSocket session.

One ConnectionSession owns one accepted socket for its whole lifetime:

    OPEN -> READING <-> PROCESSING -> CLOSED

Messages are handled strictly one at a time, so replies go out in the order
their requests arrived. A reader task keeps receiving while a message is being
processed: data messages wait in a queue until the current reply is sent, and a
disconnect or receive error sets `closed`, which cancels any in-flight
inference call right away.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, Optional

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from inference.backend import InferenceBackend
from models.frame import ImageData, Ping, Unknown
from models.outcome import Failure, FailureKind, InferenceOutcome
from protocol.codec import decode, encode, encode_pong

logger = logging.getLogger(__name__)

# Starlette raises RuntimeError when the socket is used after close.
CONNECTION_ERRORS = (WebSocketDisconnect, RuntimeError, OSError)


class SessionState(str, Enum):
    OPEN = "open"
    READING = "reading"
    PROCESSING = "processing"
    CLOSED = "closed"


class SessionClosed(Exception):
    """The connection can no longer be used; ends the receive loop."""


class ConnectionSession:
    def __init__(self, websocket: WebSocket, backend: InferenceBackend):
        self._websocket = websocket
        self._backend = backend
        self._messages: Optional[asyncio.Queue] = None
        self._closed: Optional[asyncio.Event] = None
        self._reader: Optional[asyncio.Task] = None
        self.state = SessionState.OPEN
        self.peer = _format_peer(websocket)

    async def run(self) -> None:
        """Accept the socket and serve messages until the peer goes away."""
        await self._websocket.accept()
        self._messages = asyncio.Queue()
        self._closed = asyncio.Event()
        self._reader = asyncio.ensure_future(self._read_loop())
        logger.info("Session opened: %s", self.peer)
        try:
            while True:
                self.state = SessionState.READING
                message = await self._next_message()
                if message is None:
                    break
                self.state = SessionState.PROCESSING
                await self._dispatch(message.get("text"))
        except SessionClosed as e:
            logger.info("Session %s closing: %s", self.peer, e)
        finally:
            await self._release()

    async def _read_loop(self) -> None:
        try:
            while True:
                message = await self._websocket.receive()
                if message.get("type") == "websocket.disconnect":
                    logger.info("Peer %s disconnected (code=%s)", self.peer, message.get("code"))
                    break
                self._messages.put_nowait(message)
        except CONNECTION_ERRORS as e:
            logger.info("Receive failed for %s: %r", self.peer, e)
        finally:
            self._closed.set()

    async def _dispatch(self, raw: Optional[str]) -> None:
        frame = decode(raw)
        if isinstance(frame, Ping):
            await self._send(encode_pong())
        elif isinstance(frame, ImageData):
            outcome = await self._infer(frame.base64)
            await self._send(encode(outcome.detections))
        elif isinstance(frame, Unknown):
            logger.debug("Ignoring unrecognized frame from %s (%d chars)", self.peer, len(frame.raw))

    async def _next_message(self) -> Optional[Dict[str, Any]]:
        """Return the next data message, or None once the peer is gone."""
        if self._closed.is_set():
            return None
        if not self._messages.empty():
            return self._messages.get_nowait()
        getter = asyncio.ensure_future(self._messages.get())
        closed = asyncio.ensure_future(self._closed.wait())
        try:
            done, _ = await asyncio.wait({getter, closed}, return_when=asyncio.FIRST_COMPLETED)
            if getter in done:
                return getter.result()
            return None
        finally:
            _cancel_pending(getter, closed)

    async def _infer(self, base64_image: str) -> InferenceOutcome:
        if self._closed.is_set():
            raise SessionClosed("peer disconnected before inference")
        work = asyncio.ensure_future(self._backend.detect(base64_image))
        closed = asyncio.ensure_future(self._closed.wait())
        try:
            done, _ = await asyncio.wait({work, closed}, return_when=asyncio.FIRST_COMPLETED)
            if work not in done:
                raise SessionClosed("peer disconnected during inference")
            return work.result()
        except SessionClosed:
            raise
        except Exception:
            logger.exception("Inference backend raised for %s", self.peer)
            return Failure(FailureKind.TRANSPORT_ERROR, "backend raised")
        finally:
            _cancel_pending(work, closed)

    async def _send(self, text: str) -> None:
        try:
            await self._websocket.send_text(text)
        except CONNECTION_ERRORS as e:
            raise SessionClosed(f"send failed: {e!r}") from e

    async def _release(self) -> None:
        self.state = SessionState.CLOSED
        if self._reader is not None:
            self._reader.cancel()
            # Collects the reader's outcome so a late exception is not left unretrieved.
            await asyncio.gather(self._reader, return_exceptions=True)
            self._reader = None
        ws = self._websocket
        if ws.application_state == WebSocketState.CONNECTED and ws.client_state == WebSocketState.CONNECTED:
            try:
                await ws.close()
            except CONNECTION_ERRORS:
                pass
        logger.info("Session closed: %s", self.peer)


def _cancel_pending(*futures: asyncio.Future) -> None:
    for fut in futures:
        if not fut.done():
            fut.cancel()


def _format_peer(websocket: WebSocket) -> str:
    client = getattr(websocket, "client", None)
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"
