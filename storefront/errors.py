# storefront/errors.py

"""Exceptions raised by the storefront data layer."""


class StorefrontError(Exception):
    """Base class for every storefront error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchFailure(StorefrontError):
    """A remote call failed: transport error, non-2xx status or bad body.

    4xx and 5xx are not distinguished by callers; ``status_code`` is kept
    for logging only and is ``None`` when no response arrived.
    """

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedDocument(StorefrontError):
    """A typed document is missing a field or carries the wrong tag."""

    def __init__(
        self,
        message: str,
        field: str,
        expected_tag: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.expected_tag = expected_tag
