"""Exception hierarchy for pdf-sidebyside."""


class SideBySideError(Exception):
    """Base exception for all pdf-sidebyside errors."""


class InputError(SideBySideError):
    """Raised when the caller supplies unusable input."""

    category = "invalid_input"


class MissingInputError(InputError):
    """Raised when one or both documents are absent."""

    category = "missing_input"


class UnsupportedMediaTypeError(InputError):
    """Raised when an upload is not declared as a PDF."""


class UploadTooLargeError(InputError):
    """Raised when an upload exceeds the configured size limit."""


class ProcessingError(SideBySideError):
    """Base exception for failures while building the merged PDF."""

    category = "processing_failure"


class ParseError(ProcessingError):
    """Raised when an input buffer is not a readable PDF."""


class ComposeError(ProcessingError):
    """Raised when embedding pages or saving the output fails."""


class ServiceConnectionError(SideBySideError):
    """Raised when unable to reach the merge service."""


class ServiceAPIError(SideBySideError):
    """Raised when the merge service returns an error response."""

    def __init__(
        self, status_code: int, detail: str = "", category: str = ""
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.category = category
        if detail:
            msg = f"API error {status_code}: {detail}"
        else:
            msg = f"API error {status_code}"
        super().__init__(msg)
