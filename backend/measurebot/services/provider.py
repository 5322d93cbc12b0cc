import logging

import requests

from ..core.config import settings
from ..core.errors import TranslationFailure

logger = logging.getLogger(__name__)


def _post_json(url: str, payload: dict, headers: dict | None = None) -> dict:
    try:
        r = requests.post(url, json=payload, headers=headers, timeout=settings.LLM_TIMEOUT)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as exc:
        raise TranslationFailure(f"Translator request to {url} failed: {exc}") from exc
    except ValueError as exc:
        raise TranslationFailure(f"Translator at {url} returned invalid JSON") from exc


def openai_chat(prompt: str) -> str:
    data = _post_json(
        settings.OPENAI_API_URL,
        {
            "model": settings.OPENAI_MODEL,
            "messages": [{"role": "user", "content": prompt}],
        },
        headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
    )
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise TranslationFailure("Translator response has no choices[0].message.content") from exc
    if not isinstance(content, str):
        raise TranslationFailure("Translator message content is not text")
    return content


def ollama_generate(prompt: str) -> str:
    data = _post_json(
        f"{settings.OLLAMA_HOST}/api/generate",
        {"model": settings.OLLAMA_MODEL, "prompt": prompt, "stream": False},
    )
    content = data.get("response") if isinstance(data, dict) else None
    if not isinstance(content, str):
        raise TranslationFailure("Ollama response has no 'response' text")
    return content


PROVIDERS = {
    "openai": openai_chat,
    "ollama": ollama_generate,
}


def get_provider(name: str | None = None):
    name = (name or settings.LLM_PROVIDER).lower()
    try:
        return PROVIDERS[name]
    except KeyError:
        raise TranslationFailure(f"Unknown LLM provider '{name}'") from None
