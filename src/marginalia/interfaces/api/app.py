"""Falcon ASGI application: routes, middleware and error mapping."""

import logging
from dataclasses import dataclass

import falcon
import falcon.asgi
import falcon.media
from psycopg_pool import AsyncConnectionPool

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
from marginalia.domain.exceptions import NotFound, UnreadableDocument, ValidationError
from marginalia.interfaces.api.middleware.cors import CORSMiddleware
from marginalia.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from marginalia.interfaces.api.resources.annotations import (
    AnnotationResource,
    DocumentAnnotationsResource,
)
from marginalia.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsResource,
    DocumentSummaryResource,
)
from marginalia.interfaces.api.resources.health import HealthResource
from marginalia.interfaces.api.resources.intent import IntentResource
from marginalia.interfaces.api.resources.search import (
    DocumentSearchResource,
    ProjectDocumentSearchResource,
    ProjectSearchResource,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass
class ApiUseCases:
    """Use cases the HTTP layer dispatches to."""

    create_document: CreateDocumentUseCase
    get_document: GetDocumentUseCase
    list_documents: ListDocumentsUseCase
    summarize_document: SummarizeDocumentUseCase
    set_intent: SetIntentUseCase
    create_annotation: CreateAnnotationUseCase
    list_annotations: ListAnnotationsUseCase
    update_annotation: UpdateAnnotationUseCase
    delete_annotation: DeleteAnnotationUseCase
    document_search: DocumentSearchUseCase
    global_search: GlobalSearchUseCase


async def _handle_not_found(req, resp, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def _handle_bad_input(req, resp, ex: ValidationError | UnreadableDocument, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def _handle_unexpected(req, resp, ex: Exception, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def create_app(
    use_cases: ApiUseCases,
    pool: AsyncConnectionPool | None = None,
    cors_origins: list[str] | None = None,
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> falcon.asgi.App:
    """Build the Falcon app. Without a pool, readiness is not checked and no lifespan hooks run."""
    middleware: list[object] = [CORSMiddleware(cors_origins or [])]
    if pool is not None:
        middleware.append(PoolLifespanMiddleware(pool))
    app = falcon.asgi.App(middleware=middleware)

    # One byte of headroom so oversized uploads reach the resource's own size check.
    multipart = falcon.media.MultipartFormHandler()
    multipart.parse_options.max_body_part_buffer_size = max_upload_bytes + 1
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart

    app.add_error_handler(Exception, _handle_unexpected)
    app.add_error_handler(NotFound, _handle_not_found)
    app.add_error_handler(ValidationError, _handle_bad_input)
    app.add_error_handler(UnreadableDocument, _handle_bad_input)

    health = HealthResource(pool)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route(
        "/v1/documents",
        DocumentsResource(
            use_cases.create_document,
            use_cases.list_documents,
            use_cases.summarize_document,
            max_upload_bytes,
        ),
    )
    app.add_route("/v1/documents/{document_id}", DocumentResource(use_cases.get_document))
    app.add_route(
        "/v1/documents/{document_id}/summary", DocumentSummaryResource(use_cases.get_document)
    )
    app.add_route("/v1/documents/{document_id}/intent", IntentResource(use_cases.set_intent))
    app.add_route(
        "/v1/documents/{document_id}/annotations",
        DocumentAnnotationsResource(use_cases.list_annotations, use_cases.create_annotation),
    )
    app.add_route(
        "/v1/annotations/{annotation_id}",
        AnnotationResource(use_cases.update_annotation, use_cases.delete_annotation),
    )
    app.add_route(
        "/v1/documents/{document_id}/search", DocumentSearchResource(use_cases.document_search)
    )
    app.add_route(
        "/v1/project-documents/{project_document_id}/search",
        ProjectDocumentSearchResource(use_cases.document_search),
    )
    app.add_route(
        "/v1/projects/{project_id}/search", ProjectSearchResource(use_cases.global_search)
    )
    return app
