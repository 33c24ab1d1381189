"""JSON-mode chat completion helper."""

import json
import logging
import re
from typing import Any

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


async def complete_json(
    client: AsyncOpenAI,
    model: str,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
) -> dict[str, Any]:
    """Run a chat completion that must answer with a JSON object.

    API errors propagate. A reply that is not a JSON object yields {}.
    """
    response = await client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or ""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        logger.warning("Model %s returned non-JSON content (%d chars)", model, len(content))
        return {}
    return data if isinstance(data, dict) else {}


def locate(haystack: str, needle: str) -> tuple[int, int] | None:
    """Span of needle in haystack, exact first, then case-insensitive; None if absent."""
    needle = needle.strip()
    if not needle:
        return None
    idx = haystack.find(needle)
    if idx != -1:
        return idx, idx + len(needle)
    match = re.search(re.escape(needle), haystack, re.IGNORECASE)
    return match.span() if match else None
