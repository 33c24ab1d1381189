"""Quote extraction over ranked chunks with an OpenAI chat model."""

from openai import AsyncOpenAI

from marginalia.application.dto.search_dto import QuoteCandidate, QuoteResult
from marginalia.domain.value_objects import RelevanceLevel
from marginalia.infrastructure.llm.json_chat import complete_json, locate

SYSTEM_PROMPT = (
    "You help a researcher find passages in a document. You receive a search query, "
    "the researcher's context and numbered excerpts. Return JSON: "
    '{"results": [{"excerpt": <number>, "quote": <exact text copied from the excerpt>, '
    '"explanation": <why it answers the query>, "relevance": "high"|"medium"|"low"}]}. '
    "Only quote text that appears verbatim in an excerpt. Return an empty list if nothing fits."
)


def _parse_relevance(value: object) -> RelevanceLevel:
    try:
        return RelevanceLevel(str(value).lower())
    except ValueError:
        return RelevanceLevel.LOW


class OpenAIQuoteExtractor:
    """Finds quotable passages in the top-ranked chunks."""

    def __init__(self, base_url: str, api_key: str, model: str) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model

    async def extract_quotes(
        self,
        query: str,
        research_context: str,
        candidates: list[QuoteCandidate],
    ) -> list[QuoteResult]:
        if not candidates:
            return []
        excerpts = "\n\n".join(f"[{i}] {c.text}" for i, c in enumerate(candidates))
        user_prompt = (
            f"Query: {query}\n"
            f"Research context: {research_context or 'none given'}\n\n"
            f"Excerpts:\n{excerpts}"
        )
        data = await complete_json(self._client, self._model, SYSTEM_PROMPT, user_prompt)

        results: list[QuoteResult] = []
        for item in data.get("results") or []:
            if not isinstance(item, dict):
                continue
            try:
                candidate = candidates[int(item.get("excerpt", -1))]
            except (TypeError, ValueError, IndexError):
                continue
            quote = str(item.get("quote") or "").strip()
            if not quote:
                continue
            span = locate(candidate.text, quote)
            if span is None:
                continue
            results.append(
                QuoteResult(
                    quote=candidate.text[span[0] : span[1]],
                    explanation=str(item.get("explanation") or ""),
                    relevance=_parse_relevance(item.get("relevance")),
                    start_position=candidate.start_position + span[0],
                    end_position=candidate.start_position + span[1],
                )
            )
        return results
