"""OpenAI-compatible embedding provider."""

from openai import AsyncOpenAI


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        batch_size: int = 256,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._batch_size = batch_size

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts, in request-sized batches, preserving order."""
        if not texts:
            return []
        vectors: list[list[float]] = []
        for i in range(0, len(texts), self._batch_size):
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts[i : i + self._batch_size],
            )
            vectors.extend(d.embedding for d in sorted(response.data, key=lambda d: d.index))
        return vectors
