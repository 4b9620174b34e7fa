"""
Exceptions raised by the service layer.

Routes catch these (and anything else) at the top of each handler and map
them to HTTP responses.
"""


class ServiceNotConfiguredError(RuntimeError):
    """A required setting (API key, database URL) is missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Service not configured: missing {', '.join(missing)}.")


class LLMResponseError(ValueError):
    """The language model returned something we cannot use."""


class ImageSearchError(RuntimeError):
    """The image-search API request failed."""
