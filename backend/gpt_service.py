# gpt_service.py
import os

import httpx
from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError as ShapeError

from errors import GenerationError

# Load local .env (on Render, env vars are injected automatically)
load_dotenv()

# --- OpenRouter config ---
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
API_URL = os.getenv("OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "30"))

# Optional: helps OpenRouter attribute traffic (recommended)
PUBLIC_APP_URL = os.getenv("PUBLIC_APP_URL", "")


def _response_format(output_model):
    """Ask for JSON that matches the pydantic model's schema."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": output_model.__name__,
            "strict": True,
            "schema": output_model.model_json_schema(),
        },
    }


def invoke(prompt: str, output_model, client: httpx.Client = None) -> dict:
    """
    Send one prompt and return the model's answer as a dict shaped like
    ``output_model``.

    Every failure mode (transport, HTTP status, malformed body, wrong shape)
    surfaces as GenerationError. There is no retry.
    """
    headers = {
        "Authorization": f"Bearer {OPENROUTER_API_KEY}",
        "Content-Type": "application/json",
        "HTTP-Referer": PUBLIC_APP_URL,
        "X-Title": "Mood Journal",
    }
    body = {
        "model": OPENROUTER_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "response_format": _response_format(output_model),
    }

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=LLM_TIMEOUT)
    try:
        resp = client.post(API_URL, headers=headers, json=body)
        logger.debug("LLM status: {}", resp.status_code)
        resp.raise_for_status()
        content = resp.json()["choices"][0]["message"]["content"]
        return output_model.model_validate_json(content).model_dump()
    except httpx.HTTPStatusError as e:
        raise GenerationError(
            "Model request failed",
            f"HTTP {e.response.status_code}: {e.response.text[:500]}",
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise GenerationError("Model request failed", str(e)) from e
    except ShapeError as e:
        raise GenerationError("Model returned an unexpected shape", str(e)) from e
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise GenerationError("Model returned an unreadable response", repr(e)) from e
    finally:
        if owns_client:
            client.close()
