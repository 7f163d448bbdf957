"""
Render Server API - REST endpoints

Provides the HTTP interface around the compositor:
- health and board-size endpoints
- rendering VBML documents to boards
- rendering and pushing a board through the configured transport
"""

import logging
import time
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel

from .transport import TransportError
from .validation import DocumentError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_server(request: Request):
    # ServerApp attaches itself to app.state when it builds the app
    server = getattr(request.app.state, "server", None)
    if server is None:
        raise HTTPException(status_code=503, detail="Server not ready")
    return server


class BoardInfo(BaseModel):
    rows: int
    cols: int
    transport: str


class RenderResponse(BaseModel):
    layout: List[List[int]]
    display: str


class SendResponse(BaseModel):
    success: bool
    message: str
    layout: List[List[int]]


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": time.time()}


@router.get("/board", response_model=BoardInfo)
async def get_board_info(server=Depends(get_server)):
    """Get the board size documents are rendered for."""
    config = server.config
    return BoardInfo(
        rows=config.board.rows,
        cols=config.board.cols,
        transport=config.transport.kind,
    )


@router.post("/render", response_model=RenderResponse)
async def render_document(document: Dict[str, Any] = Body(...), server=Depends(get_server)):
    """Render a VBML document and return the resulting board."""
    try:
        board = server.render(document)
    except DocumentError as e:
        logger.info(f"Rejected VBML document: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return RenderResponse(layout=board.to_rows(), display=board.to_display_string())


@router.post("/send", response_model=SendResponse)
async def send_document(document: Dict[str, Any] = Body(...), server=Depends(get_server)):
    """Render a VBML document and push it to the display."""
    if server.transport is None:
        raise HTTPException(status_code=503, detail="No transport configured")

    try:
        board = server.render(document)
    except DocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        status = await server.transport.send(board)
    except TransportError as e:
        logger.error(f"Failed to send board: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return SendResponse(success=True, message=status, layout=board.to_rows())
