"""
Commentum error types.

Every failure surfaced by the client is a CommentumError carrying a message
and a numeric status. Status 0 means no HTTP response was received.
"""


class CommentumError(Exception):
    def __init__(self, message: str, status: int, code: str = "commentum_error"):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status={self.status})"


class SessionExpiredError(CommentumError):
    """401 on an authenticated call. The session has already been invalidated."""

    def __init__(self, message: str = "Session expired. Please login again.", status: int = 401):
        super().__init__(message, status, "session_expired")


class ServerError(CommentumError):
    """Any other non-2xx response."""

    def __init__(self, message: str, status: int):
        super().__init__(message, status, "server_error")


class MalformedResponseError(CommentumError):
    def __init__(self, message: str, status: int):
        super().__init__(message, status, "malformed_response")


class TransportError(CommentumError):
    """Connection-level failure: refused, timed out, DNS."""

    def __init__(self, message: str):
        super().__init__(message, 0, "transport_error")


class StoreError(CommentumError):
    """Raised when the durable token store fails during a single call."""

    def __init__(self, message: str):
        super().__init__(message, 0, "store_error")
