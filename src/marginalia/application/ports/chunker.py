"""Chunker port - text splitting strategies."""

from typing import Protocol

from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.domain.value_objects import TextSpan


class Chunker(Protocol):
    """Port for splitting text into position-addressed chunks."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextSpan]: ...
