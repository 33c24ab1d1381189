"""Global search result variants."""

from enum import StrEnum


class SearchResultType(StrEnum):
    """Kind of entity a global search result points at."""

    FOLDER_CONTEXT = "folder_context"
    DOCUMENT_CONTEXT = "document_context"
    ANNOTATION = "annotation"
