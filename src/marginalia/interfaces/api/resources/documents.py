"""Document API resources: upload, listing, detail and summary."""

import logging
from uuid import UUID

import falcon.asgi

from marginalia.application.dto.document_dto import DocumentCreateInput
from marginalia.application.use_cases.document.create_document import CreateDocumentUseCase
from marginalia.application.use_cases.document.get_document import (
    GetDocumentUseCase,
    ListDocumentsUseCase,
)
from marginalia.application.use_cases.document.summarize_document import (
    SummarizeDocumentUseCase,
)
from marginalia.infrastructure.document_parsers import parse_file
from marginalia.interfaces.api.serializers import document_to_dict, parse_uuid, summary_to_dict

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"


def _decode_filename(raw: str | None) -> str:
    """Undo mojibake when a UTF-8 filename arrived decoded as Latin-1."""
    if not raw or not raw.strip():
        return ""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


class DocumentsResource:
    """POST /v1/documents (multipart upload) and GET /v1/documents."""

    def __init__(
        self,
        create_document: CreateDocumentUseCase,
        list_documents: ListDocumentsUseCase,
        summarize_document: SummarizeDocumentUseCase,
        max_upload_bytes: int,
    ) -> None:
        self._create_document = create_document
        self._list_documents = list_documents
        self._summarize_document = summarize_document
        self._max_upload_bytes = max_upload_bytes

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List documents without their full text."""
        documents = await self._list_documents.execute()
        resp.media = [document_to_dict(d, include_text=False) for d in documents]
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Upload one .txt, .md or .pdf file; the summary is generated after responding."""
        if "multipart/form-data" not in (req.content_type or ""):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "multipart/form-data required"}
            return

        form = await req.get_media()
        data: bytes | None = None
        filename = ""
        content_type: str | None = None
        async for part in form:
            if part.name != UPLOAD_FIELD or data is not None:
                continue
            data = bytes(await part.get_data())
            filename = _decode_filename(part.filename)
            content_type = part.content_type

        if not data:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "No file uploaded"}
            return
        if len(data) > self._max_upload_bytes:
            resp.status = falcon.HTTP_413
            resp.media = {"error": f"File exceeds {self._max_upload_bytes} bytes"}
            return

        try:
            parsed = parse_file(data, filename=filename or None, content_type=content_type)
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        document = await self._create_document.execute(
            DocumentCreateInput(filename=filename or "untitled", content=parsed.text)
        )

        async def summarize() -> None:
            await self._summarize_in_background(document.id)

        resp.schedule(summarize)
        resp.media = document_to_dict(document)
        resp.status = falcon.HTTP_201

    async def _summarize_in_background(self, document_id: UUID) -> None:
        try:
            await self._summarize_document.execute(document_id)
        except Exception:
            # Summary stays empty; the upload already succeeded.
            logger.exception("Summary generation failed for document %s", document_id)


class DocumentResource:
    """GET /v1/documents/{document_id}."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        document = await self._get_document.execute(parse_uuid(document_id, "document id"))
        resp.media = document_to_dict(document)
        resp.status = falcon.HTTP_200


class DocumentSummaryResource:
    """GET /v1/documents/{document_id}/summary."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        document = await self._get_document.execute(parse_uuid(document_id, "document id"))
        resp.media = summary_to_dict(document)
        resp.status = falcon.HTTP_200
