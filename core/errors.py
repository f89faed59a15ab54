# =============================================================================
# core/errors.py  -  Error taxonomy for the help center adapter
# =============================================================================
#
# Every failure the adapter can produce after startup ends up at the tool
# dispatcher boundary, where it is turned into an error-flagged tool result.
# ConfigError is the only one that is fatal (raised before the server runs).
# =============================================================================

import functools


class KnowledgeBaseError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(KnowledgeBaseError):
    """Required configuration is missing or invalid."""


class BackendHTTPError(KnowledgeBaseError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"API error: {status} {reason}".rstrip())


class ResponseShapeError(KnowledgeBaseError):
    """The backend returned JSON that does not have the expected shape."""


class ArticleNotFoundError(KnowledgeBaseError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Article not found: {identifier}")


class OperationError(KnowledgeBaseError):
    """A tool operation failed.

    The message is always "<operation prefix>: <original message>" and the
    original exception is chained as ``__cause__``.
    """


def operation(prefix: str):
    """Decorate an async tool operation so every failure becomes an OperationError.

    The original message text is kept: ``"<prefix>: <message>"``.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                raise OperationError(f"{prefix}: {e}") from e

        return wrapper

    return decorator
