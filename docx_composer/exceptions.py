"""Custom exceptions for docx_composer."""

from typing import Optional


class DocxComposerError(Exception):
    """Base exception for docx_composer errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class StyleError(DocxComposerError):
    """Exception raised for invalid style definitions or lookups."""

    pass


class LayoutError(DocxComposerError):
    """Exception raised for invalid document structure (tables, headings)."""

    pass


class TOCError(DocxComposerError):
    """Exception raised during table of contents generation."""

    pass


class NoHeadingsError(TOCError):
    """Raised when a TOC is requested but the document has no matching headings."""

    def __init__(self, max_level: int, details: Optional[str] = None):
        super().__init__(f"No headings found up to level {max_level}", details)
        self.max_level = max_level


class TOCNotFoundError(TOCError):
    """Raised when an existing TOC is required but none is present."""

    pass
