from fastapi import APIRouter, Depends, HTTPException

from dependencies.auth import UserContext, get_current_user
from models import ChatRequest, ChatResponse
from services.chat import get_chat_relay

router = APIRouter(tags=["chat"])


@router.post("/functions/v1/ai-chat", response_model=ChatResponse)
@router.post("/api/chat", response_model=ChatResponse)
def chat(body: ChatRequest, user: UserContext = Depends(get_current_user)):
    """
    Ask the study assistant a question.

    The caller sends recent history with every request and stores both
    sides of the exchange itself.
    """
    message = (body.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    relay = get_chat_relay()
    reply = relay.reply(message, body.paper_context, body.conversation_history)
    return ChatResponse(message=reply)
