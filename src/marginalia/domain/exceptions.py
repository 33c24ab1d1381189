"""Domain exceptions."""


class MarginaliaError(Exception):
    """Base exception for Marginalia."""

    pass


class NotFound(MarginaliaError):
    """Requested resource was not found."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(MarginaliaError):
    """Validation failed for input data."""

    pass


class UnreadableDocument(MarginaliaError):
    """Extracted text is unusable (scanned PDF, custom font encoding, too short).

    The message is meant for the end user and says how to fix the upload.
    """

    pass
