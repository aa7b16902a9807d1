import logging
import os
import sys
from typing import Any, Optional

import httpx
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TIMEOUT_SECONDS = 60.0


class RelayError(Exception):
    """Base class for failures that map to a fixed client-facing message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidRequest(RelayError):
    status_code = 400
    message = "Message and API key are required"


class UpstreamError(RelayError):
    message = "Failed to get response from Gemini API"

    def __init__(self, status_code: int) -> None:
        super().__init__(status_code)


class MalformedUpstreamResponse(RelayError):
    message = "Invalid response format from Gemini API"


class EmptyUpstreamText(RelayError):
    message = "No response text from Gemini API"


def get_base_url() -> str:
    load_dotenv()
    return (os.getenv("GEMINI_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def get_model_name() -> str:
    load_dotenv()
    return os.getenv("GEMINI_MODEL") or DEFAULT_MODEL


def get_timeout_seconds() -> float:
    load_dotenv()
    raw = os.getenv("GEMINI_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid GEMINI_TIMEOUT_SECONDS=%r", raw)
        return DEFAULT_TIMEOUT_SECONDS


def get_api_key() -> str:
    load_dotenv()
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise RuntimeError(
            "No API key found. Set GEMINI_API_KEY (or GOOGLE_API_KEY) in your environment or .env file."
        )
    return api_key


def _build_client(timeout_seconds: float) -> httpx.Client:
    return httpx.Client(timeout=timeout_seconds, follow_redirects=True)


def _is_missing(value: Any) -> bool:
    # Empty objects and arrays still count as present.
    return value is None or (not value and not isinstance(value, (dict, list)))


def extract_text(data: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a generateContent body.

    Raises MalformedUpstreamResponse when the first candidate has no content
    and EmptyUpstreamText when the content carries no usable text.
    """
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates or _is_missing(candidates[0]):
        raise MalformedUpstreamResponse()

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    if _is_missing(content):
        raise MalformedUpstreamResponse()

    parts = content.get("parts") if isinstance(content, dict) else None
    first_part = parts[0] if isinstance(parts, list) and parts else None
    text = first_part.get("text") if isinstance(first_part, dict) else None
    if not isinstance(text, str) or not text:
        raise EmptyUpstreamText()
    return text


def ask_gemini(
    message: str,
    api_key: str,
    model_name: str | None = None,
) -> str:
    resolved_model = model_name or get_model_name()
    url = f"{get_base_url()}/models/{resolved_model}:generateContent"
    payload = {"contents": [{"parts": [{"text": message}]}]}

    logger.info(
        "Calling Gemini model=%s message_len=%d api_key_provided=%s",
        resolved_model,
        len(message or ""),
        bool(api_key),
    )
    logger.debug("Message preview: %s", (message or "")[:1000])

    with _build_client(get_timeout_seconds()) as client:
        resp = client.post(
            url,
            params={"key": api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        logger.info("Gemini HTTP model=%s returned status=%d", resolved_model, resp.status_code)

        if not resp.is_success:
            logger.error("Gemini API error response: %s", resp.text[:1000])
            raise UpstreamError(resp.status_code)

        data = resp.json()

    text = extract_text(data)
    logger.info("Gemini response received model=%s resp_len=%d", resolved_model, len(text))
    logger.debug("Response preview: %s", text[:1000])
    return text


def chat_loop(model_name: str | None = None) -> None:
    api_key = get_api_key()
    resolved_model = model_name or get_model_name()
    print(f"Gemini chat started with model: {resolved_model}")
    print("Each message is sent on its own. Type 'exit' to quit.\n")

    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            return

        if not user_input:
            continue
        if user_input.lower() in {"exit", "quit"}:
            print("Goodbye!")
            return

        try:
            text = ask_gemini(user_input, api_key, model_name=resolved_model)
            print(f"Gemini: {text}\n")
        except RelayError as exc:
            print(f"Error: {exc.message}\n")
        except httpx.HTTPError as exc:
            print(f"Error: {exc}\n")


def main(argv: Optional[list[str]] = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    model_name = args[0] if args else None

    try:
        chat_loop(model_name=model_name)
        return 0
    except Exception as exc:
        print(f"Startup error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
