"""Google Gemini API wrapper with error handling."""

import logging

import httpx
from google import genai
from google.genai import errors, types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


class GeneratorError(RuntimeError):
    """The model provider failed or returned an unusable response."""

    def __init__(self, status: int | None, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Gemini request failed ({status}): {body}" if status else body)


def is_configured() -> bool:
    return bool(settings.gemini_api_key)


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=settings.gemini_timeout_seconds * 1000),
        )
    return _client


def strip_json_response(text: str) -> str:
    """Trim markdown code fences and keep the outermost {...} object."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        text = text[start:end + 1]
    return text


async def generate(system_prompt: str, user_prompt: str) -> str:
    """Send a system + user prompt to Gemini and return the response text."""
    client = get_client()
    if client is None:
        raise GeneratorError(None, "Gemini API key is not configured")

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=settings.gemini_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            ),
        )
    except errors.APIError as e:
        logger.error("Gemini API error %s: %s", e.code, e.message)
        raise GeneratorError(e.code, e.message or str(e)) from e
    except httpx.HTTPError as e:
        logger.error("Gemini transport error: %s", e)
        raise GeneratorError(None, str(e) or type(e).__name__) from e

    text = response.text
    if not text:
        raise GeneratorError(None, "Gemini returned an empty response")
    return text


async def generate_json(system_prompt: str, user_prompt: str) -> str:
    """Like generate(), but returns just the JSON object text."""
    return strip_json_response(await generate(system_prompt, user_prompt))
