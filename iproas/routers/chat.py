# iproas/routers/chat.py
# -----------------------------------------------------------------------------
# /chat : streaming proxy to the hosted language model (text/event-stream)
# -----------------------------------------------------------------------------
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from iproas.schemas.chat import ChatRequest
from iproas.services import chat as chat_service

router = APIRouter(tags=["chat"])


@router.post("/chat")
async def chat(req: ChatRequest):
    try:
        chat_service.ensure_configured()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))

    fragments = chat_service.stream_chat(req.messages, req.context)
    return StreamingResponse(
        chat_service.sse_events(fragments),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
