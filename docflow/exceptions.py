"""Custom Exception Hierarchy

Exception hierarchy for docflow providing granular exception types for
validation, document I/O, rendering and pipeline failures.
"""


class DocFlowError(Exception):
    """Base exception for all docflow errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions raised by the package.
    """
    pass


# Validation Errors
class ValidationError(DocFlowError):
    """Raised when input validation fails."""
    pass


class InvalidRangeError(ValidationError):
    """Raised when a horizontal range does not satisfy left < right."""

    def __init__(self, left: float, right: float):
        self.left = left
        self.right = right
        super().__init__(
            f"Range left ({left}) must be smaller than right ({right})"
        )


class InvalidOptionError(ValidationError):
    """Raised when a layout option has an unsupported value."""
    pass


# Document I/O Errors
class DocumentIOError(DocFlowError):
    """Base class for fetch, decode and embed failures."""
    pass


class InvalidUrlError(DocumentIOError):
    """Raised when a URL is missing or not http(s)."""
    pass


class FetchError(DocumentIOError):
    """Raised when downloading a remote document fails."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Failed to fetch '{url}': {reason}")


class PdfDecodeError(DocumentIOError):
    """Raised when fetched bytes cannot be read as a PDF."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Could not read PDF from '{url}': {reason}")


class ImageEmbedError(DocumentIOError):
    """Raised when an image cannot be decoded or drawn."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to embed image: {reason}")


# Rendering Errors
class RenderingError(DocFlowError):
    """Base class for PDF rendering errors."""
    pass


class FontError(RenderingError):
    """Raised when font setup or registration fails."""
    pass


# Pipeline Errors
class PipelineError(DocFlowError):
    """Base class for pipeline orchestration errors."""
    pass


class PipelineStepError(PipelineError):
    """Raised when a specific pipeline step fails.

    This wraps the underlying exception while preserving the pipeline context.
    """

    def __init__(self, step_name: str, original_exception: Exception):
        self.step_name = step_name
        self.original_exception = original_exception
        super().__init__(
            f"Pipeline step '{step_name}' failed: {str(original_exception)}"
        )
