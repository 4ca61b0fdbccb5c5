"""Custom exceptions shared by the modeling, rendering and fitting contexts."""

from typing import Optional


class InvalidResumeDataError(ValueError):
    """
    Exception raised when resume or source layout wire data is malformed.

    Raised while converting wire dictionaries into resume values, before any
    layout or rendering work runs.

    Attributes:
        message: Error description
        field_path: Dotted path to the offending field (e.g., 'experience[0].bullets')
    """

    def __init__(self, message: str, field_path: Optional[str] = None):
        self.message = message
        self.field_path = field_path

        if field_path:
            super().__init__(f"{message} (at {field_path})")
        else:
            super().__init__(message)


class FontResourceError(RuntimeError):
    """
    Exception raised when font metrics for a style variant cannot be loaded.

    There is no fallback measurer: wrapping with approximate widths would break
    line-for-line agreement between the PDF and DOCX outputs.
    """

    def __init__(self, font_name: str, original_error: Optional[Exception] = None):
        self.font_name = font_name
        self.original_error = original_error

        message = f"Unable to load font metrics for '{font_name}'"
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class RenderParityError(RuntimeError):
    """Exception raised when a renderer realizes a different page count than the plan."""

    def __init__(self, renderer: str, expected_pages: int, actual_pages: int):
        self.renderer = renderer
        self.expected_pages = expected_pages
        self.actual_pages = actual_pages
        super().__init__(
            f"{renderer} renderer produced {actual_pages} page(s), "
            f"pagination plan expects {expected_pages}"
        )


class OnePageFitConflictError(ValueError):
    """
    Exception raised by the export pipeline when the resume cannot fit one page.

    Attributes:
        reason: User-facing explanation, safe to display as-is
        estimated_lines: Final line estimate after every reduction step
        page_count: Exact page count when known
    """

    def __init__(self, reason: str, estimated_lines: int, page_count: Optional[int] = None):
        self.reason = reason
        self.estimated_lines = estimated_lines
        self.page_count = page_count
        super().__init__(reason)
