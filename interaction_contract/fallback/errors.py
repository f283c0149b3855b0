"""Exceptions raised by engine client wrappers."""

from typing import Optional


class EngineRequestError(Exception):
    """
    The engine answered, but not with a success status.

    The message carries the status so that log lines and string-only error
    channels still classify as non_ok_response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @classmethod
    def from_status(cls, status_code: int, body: str = "") -> "EngineRequestError":
        return cls(
            f"Engine request failed: {status_code} {body}".rstrip(),
            status_code=status_code,
            response_body=body,
        )
