"""Exceptions raised by the conversion pipeline."""


class PostPrintError(Exception):
    """Base class for PostPrint errors."""


class ConversionRequestError(PostPrintError):
    """The request cannot be served; reported back to the user as-is."""


class InvalidURLError(ConversionRequestError):
    """URL is malformed or not an X/Twitter post or article."""


class AuthRequiredError(ConversionRequestError):
    """Articles are only visible to a logged-in session."""


class ExtractionEmptyError(ConversionRequestError):
    """Extraction ran to completion but produced nothing usable."""


class UpstreamError(PostPrintError):
    """The syndication endpoint answered with an error status."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
