"""Errors that map onto proxy HTTP statuses."""


class ProxyError(Exception):
    """Base error carrying the HTTP status and extra response fields."""

    status = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.message, **self.context}


class BadRequest(ProxyError):
    """Unrecognized type or feed parameter."""

    status = 400


class UpstreamUnavailable(ProxyError):
    """Upstream answered but had no usable data after any fallback."""

    status = 503
