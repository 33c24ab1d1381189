"""Single-pass annotation pipeline: per-chunk highlight extraction with an OpenAI chat model.

Quotes returned by the model are re-anchored in the chunk text so every
annotation carries offsets into the document's full text. Highlights that
overlap a prior user annotation or an already accepted highlight are dropped.
"""

import asyncio
import logging
from uuid import UUID

from openai import AsyncOpenAI

from marginalia.application.dto.annotation_dto import (
    CandidateChunk,
    PipelineAnnotation,
    PriorAnnotation,
)
from marginalia.domain.value_objects import AnnotationCategory
from marginalia.infrastructure.llm.json_chat import complete_json, locate

logger = logging.getLogger(__name__)

_GENERATED_CATEGORIES = [c.value for c in AnnotationCategory if c != AnnotationCategory.USER_ADDED]

SYSTEM_PROMPT = (
    "You annotate a document for a researcher. Given the research intent and one excerpt, "
    "pick the passages that matter for that intent. Return JSON: "
    '{"highlights": [{"quote": <exact text copied from the excerpt>, '
    f'"category": one of {_GENERATED_CATEGORIES}, '
    '"note": <one or two sentences on why it matters>, "confidence": <0..1>}]}. '
    "Return an empty list when nothing in the excerpt is relevant."
)


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)


def _confidence(value: object) -> float:
    try:
        return min(max(float(value), 0.0), 1.0)
    except (TypeError, ValueError):
        return 0.5


class OpenAIAnnotationPipeline:
    """Annotation pipeline backed by chat completions, bounded concurrency per chunk."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        max_concurrency: int = 5,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._max_concurrency = max_concurrency

    async def _annotate_chunk(
        self, chunk: CandidateChunk, intent: str, semaphore: asyncio.Semaphore
    ) -> list[PipelineAnnotation]:
        async with semaphore:
            data = await complete_json(
                self._client,
                self._model,
                SYSTEM_PROMPT,
                f"Research intent: {intent}\n\nExcerpt:\n{chunk.text}",
            )
        found: list[PipelineAnnotation] = []
        for item in data.get("highlights") or []:
            if not isinstance(item, dict):
                continue
            quote = str(item.get("quote") or "").strip()
            span = locate(chunk.text, quote)
            if span is None:
                continue
            # user_added is reserved for manual annotations.
            if item.get("category") not in _GENERATED_CATEGORIES:
                continue
            found.append(
                PipelineAnnotation(
                    absolute_start=chunk.start_position + span[0],
                    absolute_end=chunk.start_position + span[1],
                    highlight_text=chunk.text[span[0] : span[1]],
                    category=AnnotationCategory(item["category"]),
                    note=str(item.get("note") or ""),
                    confidence=_confidence(item.get("confidence")),
                )
            )
        return found

    async def run(
        self,
        chunks: list[CandidateChunk],
        intent: str,
        document_id: UUID,
        full_text: str,
        prior_annotations: list[PriorAnnotation],
    ) -> list[PipelineAnnotation]:
        semaphore = asyncio.Semaphore(self._max_concurrency)
        per_chunk = await asyncio.gather(
            *(self._annotate_chunk(c, intent, semaphore) for c in chunks)
        )

        taken = [(p.start_position, p.end_position) for p in prior_annotations]
        accepted: list[PipelineAnnotation] = []
        proposals = sorted(
            (a for found in per_chunk for a in found),
            key=lambda a: a.confidence,
            reverse=True,
        )
        for annotation in proposals:
            if annotation.absolute_end > len(full_text):
                continue
            if _overlaps(annotation.absolute_start, annotation.absolute_end, taken):
                continue
            taken.append((annotation.absolute_start, annotation.absolute_end))
            accepted.append(annotation)

        accepted.sort(key=lambda a: a.absolute_start)
        logger.info(
            "Document %s: %d highlights kept of %d proposed",
            document_id,
            len(accepted),
            len(proposals),
        )
        return accepted
