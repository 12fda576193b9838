"""
Assessment Service Errors
=========================

Domain exceptions raised by the catalog, scoring and report layers.
Routes translate them into HTTP responses.
"""


class AssessmentError(Exception):
    """Base error for the assessment service."""


class NotFoundError(AssessmentError):
    """Referenced document is absent or owned by another organization."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ValidationError(AssessmentError):
    """Client supplied an invalid value."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnsupportedFormatError(ValidationError):
    """Requested report format is not one of pdf, excel or json."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unsupported format: {fmt}", field="format")
        self.format = fmt


class RenderError(AssessmentError):
    """A report encoder failed; no partial output is returned."""
