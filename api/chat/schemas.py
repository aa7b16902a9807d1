from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    # Optional here so a missing field is reported as the relay's 400, not a 422.
    message: str | None = Field(default=None, description="User message to relay to Gemini")
    api_key: str | None = Field(default=None, alias="apiKey", description="Gemini API key supplied by the caller")


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str
