"""
Message routes

The whole caller contract travels through one endpoint; the response body is
whatever the message router returns, including {"error": ...} envelopes.
"""

from typing import Any

from fastapi import APIRouter, Request

from ..models import Message

router = APIRouter(tags=["messages"])


@router.post("/messages")
async def handle_message(message: Message, request: Request) -> Any:
    """Dispatch one typed message"""
    container = request.app.state.container
    return await container.router.dispatch(message)
