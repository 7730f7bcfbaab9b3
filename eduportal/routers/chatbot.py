from fastapi import APIRouter, Depends

from eduportal.dependencies import require_user
from eduportal.models import User
from eduportal.schemas.requests import ChatbotForm
from eduportal.services import chatbot

router = APIRouter(prefix="/api", tags=["chatbot"])


@router.post("/chatbot")
def ask_chatbot(form: ChatbotForm, current_user: User = Depends(require_user)):
    return {"ok": True, "response": chatbot.reply(form.message, current_user.type)}
