"""Domain value objects."""

from marginalia.domain.value_objects.annotation_category import AnnotationCategory
from marginalia.domain.value_objects.relevance import RelevanceLevel
from marginalia.domain.value_objects.search_result_type import SearchResultType
from marginalia.domain.value_objects.text_span import TextSpan
from marginalia.domain.value_objects.thoroughness import (
    THOROUGHNESS_POLICIES,
    ThoroughnessLevel,
    ThoroughnessPolicy,
    parse_thoroughness,
    policy_for,
)

__all__ = [
    "AnnotationCategory",
    "RelevanceLevel",
    "SearchResultType",
    "THOROUGHNESS_POLICIES",
    "TextSpan",
    "ThoroughnessLevel",
    "ThoroughnessPolicy",
    "parse_thoroughness",
    "policy_for",
]
