"""Search API resources: semantic document search and lexical project search."""

import falcon.asgi

from marginalia.application.use_cases.search.document_search import DocumentSearchUseCase
from marginalia.application.use_cases.search.global_search import GlobalSearchUseCase
from marginalia.interfaces.api.serializers import (
    global_response_to_dict,
    parse_filters,
    parse_uuid,
    quote_to_dict,
    read_json,
)


async def _read_query(req: falcon.asgi.Request) -> tuple[dict, str | None]:
    body = await read_json(req)
    query = body.get("query")
    return body, query if isinstance(query, str) else None


class DocumentSearchResource:
    """POST /v1/documents/{document_id}/search - quotes relevant to the query."""

    def __init__(self, document_search: DocumentSearchUseCase) -> None:
        self._document_search = document_search

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        doc_id = parse_uuid(document_id, "document id")
        _, query = await _read_query(req)
        if query is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Query is required"}
            return

        results = await self._document_search.execute(doc_id, query)
        resp.media = [quote_to_dict(r) for r in results]
        resp.status = falcon.HTTP_200


class ProjectDocumentSearchResource:
    """POST /v1/project-documents/{project_document_id}/search."""

    def __init__(self, document_search: DocumentSearchUseCase) -> None:
        self._document_search = document_search

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_document_id: str,
    ) -> None:
        pd_id = parse_uuid(project_document_id, "project document id")
        _, query = await _read_query(req)
        if query is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Query is required"}
            return

        results = await self._document_search.execute_for_project_document(pd_id, query)
        resp.media = [quote_to_dict(r) for r in results]
        resp.status = falcon.HTTP_200


class ProjectSearchResource:
    """POST /v1/projects/{project_id}/search - global search across a project."""

    def __init__(self, global_search: GlobalSearchUseCase) -> None:
        self._global_search = global_search

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, project_id: str
    ) -> None:
        """Body: {query, filters?, limit?}. Returns {results, totalResults, searchTime}."""
        proj_id = parse_uuid(project_id, "project id")
        body, query = await _read_query(req)
        if query is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Query is required"}
            return
        limit = body.get("limit")
        if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool)):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "limit must be an integer"}
            return

        response = await self._global_search.execute(
            proj_id, query, parse_filters(body.get("filters")), limit
        )
        resp.media = global_response_to_dict(response)
        resp.status = falcon.HTTP_200
