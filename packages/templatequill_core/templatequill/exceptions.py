"""Custom exceptions for TemplateQuill."""

from typing import Optional


class TemplateError(Exception):
    """Base exception for template processing errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class TemporaryFileCreationError(TemplateError):
    """Exception raised when no writable working file can be created."""

    def __init__(self, temp_dir: Optional[str] = None, details: Optional[str] = None):
        message = "Could not create a temporary file"
        if temp_dir:
            message = f"{message} in {temp_dir}"
        super().__init__(message, details)
        self.temp_dir = temp_dir


class CopyFileError(TemplateError):
    """Exception raised when the template cannot be copied to its working location."""

    def __init__(self, source: str, destination: str, details: Optional[str] = None):
        super().__init__(f"Could not copy '{source}' to '{destination}'", details)
        self.source = source
        self.destination = destination


class StructuralNotFoundError(TemplateError):
    """Exception raised when a structure required by an edit is missing."""

    pass


class PlaceholderNotFoundError(StructuralNotFoundError):
    """Exception raised when a row-clone macro is not present in the main part."""

    def __init__(self, search: str, details: Optional[str] = None):
        super().__init__(
            "Can not clone row, template variable not found or variable contains markup",
            details or search,
        )
        self.search = search


class RowBoundaryNotFoundError(StructuralNotFoundError):
    """Exception raised when no table row encloses a found macro."""

    pass


class StylesheetTransformError(TemplateError):
    """Exception raised during the optional XSL transformation step."""

    pass


class ArchiveCloseError(TemplateError):
    """Exception raised when the document package cannot be finalized."""

    pass
