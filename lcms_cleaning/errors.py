import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ServerError(Exception):
    """An error carrying a message and the HTTP status code to report it with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self):
        return f"ServerError({self.message!r}, {self.status_code})"


@contextmanager
def classify_errors(message: str):
    """Re-raise anything that is not already a ServerError as a 500 with `message`.

    ServerErrors raised inside the block (including ones raised deep inside a
    transaction body) pass through untouched.
    """
    try:
        yield
    except ServerError as e:
        if e.status_code < 500:
            logger.warning(f"{e.status_code} {e.message}")
        raise
    except Exception as e:
        logger.error(f"{message}: {str(e)}", exc_info=True)
        raise ServerError(message, 500) from e
