"""Global search use case - lexical search across a project's folders, documents and annotations."""

import logging
import time
from uuid import UUID

from marginalia.application.dto.search_dto import GlobalSearchResponse, SearchFilters
from marginalia.application.services.global_scorer import score_project
from marginalia.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class GlobalSearchUseCase:
    """Score a project's four sources and return the top hits."""

    def __init__(self, unit_of_work_factory: type, default_limit: int = DEFAULT_LIMIT) -> None:
        self._uow_factory = unit_of_work_factory
        self._default_limit = default_limit

    async def execute(
        self,
        project_id: UUID,
        query: str,
        filters: SearchFilters | None = None,
        limit: int | None = None,
    ) -> GlobalSearchResponse:
        """Search a project. An unknown project yields an empty response, not an error."""
        started = time.perf_counter()
        limit = self._default_limit if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be a positive integer")

        async with self._uow_factory() as uow:
            project = await uow.projects.get_project(project_id)
            if not project:
                return GlobalSearchResponse(search_time=_elapsed_ms(started))
            folders = await uow.projects.list_folders(project_id)
            documents = await uow.projects.list_project_documents(project_id)
            annotations = await uow.projects.list_project_annotations(project_id)

        results = score_project(query, project, folders, documents, annotations, filters)
        response = GlobalSearchResponse(
            results=results[:limit],
            total_results=len(results),
            search_time=_elapsed_ms(started),
        )
        logger.info(
            "Project %s search: %d hits, %d returned in %d ms",
            project_id,
            response.total_results,
            len(response.results),
            response.search_time,
        )
        return response
