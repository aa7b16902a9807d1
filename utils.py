from collections.abc import Mapping

from fastapi.responses import JSONResponse

from api.chat.schemas import ErrorResponse


def error_response(status_code: int, message: str, headers: Mapping[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )
