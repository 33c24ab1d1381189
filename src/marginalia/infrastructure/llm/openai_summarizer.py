"""Document summary with an OpenAI chat model."""

from openai import AsyncOpenAI

from marginalia.application.dto.document_dto import DocumentSummary
from marginalia.infrastructure.llm.json_chat import complete_json

MAX_INPUT_CHARS = 12000

SYSTEM_PROMPT = (
    "Summarize the document for a researcher. Return JSON: "
    '{"summary": <2-4 sentences>, "mainArguments": [<string>], "keyConcepts": [<string>]}.'
)


def _strings(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v]


class OpenAIDocumentSummarizer:
    """Summarizes the opening of a document."""

    def __init__(self, base_url: str, api_key: str, model: str) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model

    async def summarize(self, full_text: str) -> DocumentSummary:
        data = await complete_json(
            self._client, self._model, SYSTEM_PROMPT, full_text[:MAX_INPUT_CHARS]
        )
        return DocumentSummary(
            summary=str(data.get("summary") or ""),
            main_arguments=_strings(data.get("mainArguments")),
            key_concepts=_strings(data.get("keyConcepts")),
        )
