"""Application entry point and composition root."""

import falcon.asgi

from marginalia import __version__
from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.application.use_cases.analysis.set_intent import SetIntentUseCase
from marginalia.application.use_cases.annotation.create_annotation import CreateAnnotationUseCase
from marginalia.application.use_cases.annotation.delete_annotation import DeleteAnnotationUseCase
from marginalia.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from marginalia.application.use_cases.annotation.update_annotation import UpdateAnnotationUseCase
from marginalia.application.use_cases.document.create_document import CreateDocumentUseCase
from marginalia.application.use_cases.document.get_document import (
    GetDocumentUseCase,
    ListDocumentsUseCase,
)
from marginalia.application.use_cases.document.summarize_document import (
    SummarizeDocumentUseCase,
)
from marginalia.application.use_cases.search.document_search import DocumentSearchUseCase
from marginalia.application.use_cases.search.global_search import GlobalSearchUseCase
from marginalia.config import get_settings
from marginalia.infrastructure.chunking.sentence_chunker import SentenceChunker
from marginalia.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from marginalia.infrastructure.llm.openai_annotation_pipeline import OpenAIAnnotationPipeline
from marginalia.infrastructure.llm.openai_quote_extractor import OpenAIQuoteExtractor
from marginalia.infrastructure.llm.openai_summarizer import OpenAIDocumentSummarizer
from marginalia.infrastructure.persistence.postgres.connection import create_pool
from marginalia.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from marginalia.interfaces.api.app import ApiUseCases, create_app
from marginalia.logging_config import configure_logging


def create_marginalia_app() -> falcon.asgi.App:
    """Composition root - build the Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    llm_args = {
        "base_url": settings.embedding_api_url,
        "api_key": settings.embedding_api_key,
        "model": settings.chat_model,
    }
    embedding_provider = OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
    )
    quote_extractor = OpenAIQuoteExtractor(**llm_args)
    annotation_pipeline = OpenAIAnnotationPipeline(**llm_args)
    summarizer = OpenAIDocumentSummarizer(**llm_args)

    use_cases = ApiUseCases(
        create_document=CreateDocumentUseCase(
            unit_of_work_factory=uow_factory,
            chunker=SentenceChunker(),
            chunking_config=ChunkingConfig(
                chunk_size=settings.chunk_size,
                chunk_overlap=settings.chunk_overlap,
            ),
        ),
        get_document=GetDocumentUseCase(unit_of_work_factory=uow_factory),
        list_documents=ListDocumentsUseCase(unit_of_work_factory=uow_factory),
        summarize_document=SummarizeDocumentUseCase(
            unit_of_work_factory=uow_factory,
            summarizer=summarizer,
        ),
        set_intent=SetIntentUseCase(
            unit_of_work_factory=uow_factory,
            embedding_provider=embedding_provider,
            annotation_pipeline=annotation_pipeline,
        ),
        create_annotation=CreateAnnotationUseCase(unit_of_work_factory=uow_factory),
        list_annotations=ListAnnotationsUseCase(unit_of_work_factory=uow_factory),
        update_annotation=UpdateAnnotationUseCase(unit_of_work_factory=uow_factory),
        delete_annotation=DeleteAnnotationUseCase(unit_of_work_factory=uow_factory),
        document_search=DocumentSearchUseCase(
            unit_of_work_factory=uow_factory,
            embedding_provider=embedding_provider,
            quote_extractor=quote_extractor,
        ),
        global_search=GlobalSearchUseCase(
            unit_of_work_factory=uow_factory,
            default_limit=settings.search_limit,
        ),
    )
    return create_app(
        use_cases,
        pool=pool,
        cors_origins=settings.cors_origin_list,
        max_upload_bytes=settings.max_upload_bytes,
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    print(f"Marginalia v{__version__} ({settings.environment})")
    uvicorn.run(
        "marginalia.main:create_marginalia_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
