"""Annotation categories."""

from enum import StrEnum


class AnnotationCategory(StrEnum):
    """Closed set of annotation categories."""

    KEY_QUOTE = "key_quote"
    ARGUMENT = "argument"
    EVIDENCE = "evidence"
    METHODOLOGY = "methodology"
    USER_ADDED = "user_added"
