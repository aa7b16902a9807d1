from api.chat.schemas import ChatRequest, ChatResponse
from gemini_chat import InvalidRequest, ask_gemini


def handle(message: str | None, api_key: str | None) -> str:
    if not message or not api_key:
        raise InvalidRequest()
    return ask_gemini(message, api_key)


def relay_chat(request: ChatRequest) -> ChatResponse:
    text = handle(request.message, request.api_key)
    return ChatResponse(response=text)
