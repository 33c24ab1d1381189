"""Application ports - interfaces for external adapters."""

from marginalia.application.ports.annotation_pipeline import AnnotationPipeline
from marginalia.application.ports.chunker import Chunker
from marginalia.application.ports.document_summarizer import DocumentSummarizer
from marginalia.application.ports.embedding_provider import EmbeddingProvider
from marginalia.application.ports.quote_extractor import QuoteExtractor
from marginalia.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AnnotationPipeline",
    "Chunker",
    "DocumentSummarizer",
    "EmbeddingProvider",
    "QuoteExtractor",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
