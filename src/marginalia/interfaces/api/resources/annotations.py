"""Annotation API resources."""

import falcon.asgi

from marginalia.application.dto.annotation_dto import AnnotationCreateInput
from marginalia.application.use_cases.annotation.create_annotation import CreateAnnotationUseCase
from marginalia.application.use_cases.annotation.delete_annotation import DeleteAnnotationUseCase
from marginalia.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from marginalia.application.use_cases.annotation.update_annotation import UpdateAnnotationUseCase
from marginalia.interfaces.api.serializers import (
    annotation_to_dict,
    parse_category,
    parse_uuid,
    read_json,
)


def _is_position(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class DocumentAnnotationsResource:
    """GET|POST /v1/documents/{document_id}/annotations."""

    def __init__(
        self,
        list_annotations: ListAnnotationsUseCase,
        create_annotation: CreateAnnotationUseCase,
    ) -> None:
        self._list_annotations = list_annotations
        self._create_annotation = create_annotation

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        annotations = await self._list_annotations.execute(parse_uuid(document_id, "document id"))
        resp.media = [annotation_to_dict(a) for a in annotations]
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Create a manual annotation."""
        doc_id = parse_uuid(document_id, "document id")
        body = await read_json(req)
        start = body.get("startPosition")
        end = body.get("endPosition")
        if not (_is_position(start) and _is_position(end)) or not body.get("category"):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required fields"}
            return

        annotation = await self._create_annotation.execute(
            AnnotationCreateInput(
                document_id=doc_id,
                start_position=start,
                end_position=end,
                highlighted_text=body.get("highlightedText") or "",
                category=parse_category(body["category"]),
                note=body.get("note") or "",
                is_ai_generated=bool(body.get("isAiGenerated", False)),
            )
        )
        resp.media = annotation_to_dict(annotation)
        resp.status = falcon.HTTP_201


class AnnotationResource:
    """PUT|DELETE /v1/annotations/{annotation_id}."""

    def __init__(
        self,
        update_annotation: UpdateAnnotationUseCase,
        delete_annotation: DeleteAnnotationUseCase,
    ) -> None:
        self._update_annotation = update_annotation
        self._delete_annotation = delete_annotation

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, annotation_id: str
    ) -> None:
        ann_id = parse_uuid(annotation_id, "annotation id")
        body = await read_json(req)
        if not body.get("note") or not body.get("category"):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Note and category are required"}
            return

        annotation = await self._update_annotation.execute(
            ann_id, body["note"], parse_category(body["category"])
        )
        resp.media = annotation_to_dict(annotation)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, annotation_id: str
    ) -> None:
        await self._delete_annotation.execute(parse_uuid(annotation_id, "annotation id"))
        resp.media = {"success": True}
        resp.status = falcon.HTTP_200
