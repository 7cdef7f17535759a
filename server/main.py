"""FastAPI web service that decodes NMEA sentences into fixes.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

or ``gpsfix serve``. ``POST /decode`` merges a batch of sentences into a
fresh fix and returns it. WebSocket clients connect to ``ws://<host>:8000/ws``
and send one sentence per text message; every connection accumulates its
own fix and receives a JSON fix message after each sentence.
"""

import asyncio
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from gpsfix import FixState
from gpsfix.nmea.checksum import calc_xor_checksum, format_checksum, has_valid_checksum
from server.formatters import fix_to_dict, format_fix_message

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

_TIMEOUT_SECONDS = 30.0


class DecodeRequest(BaseModel):
    sentences: list[str]
    ignore_checksum: bool = False


class ChecksumRequest(BaseModel):
    text: str


app = FastAPI(title="gpsfix")


@app.post("/decode")
def decode(request: DecodeRequest) -> dict:
    """Merge the sentences, in order, into a new fix.

    ``ok`` is False if any sentence failed (or none were given); the fix
    still holds everything the successful sentences contributed.
    """
    fix = FixState()
    ok = fix.parse(request.sentences, request.ignore_checksum)
    return {"ok": ok, "fix": fix_to_dict(fix)}


@app.post("/checksum")
def checksum(request: ChecksumRequest) -> dict:
    """Compute the NMEA checksum of a sentence or bare payload."""
    value = calc_xor_checksum(request.text)
    return {
        "checksum": format_checksum(value),
        "valid": has_valid_checksum(request.text.strip()),
    }


async def _decode_until_disconnect(websocket: WebSocket, fix: FixState) -> None:
    try:
        while True:
            sentence = await asyncio.wait_for(websocket.receive_text(), timeout=_TIMEOUT_SECONDS)
            ok = fix.parse(sentence)
            await websocket.send_text(format_fix_message(fix, ok))
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Decode sentences sent over a WebSocket into a per-connection fix.

    Messages on one connection are handled strictly in order, so the fix is
    never mutated concurrently. The connection closes with code 1001 if no
    sentence arrives within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    fix = FixState()
    logger.debug("WebSocket client connected")
    await _decode_until_disconnect(websocket, fix)
    logger.debug("WebSocket client finished with %s", fix.type_names())
