# portfolio_contact/common/exceptions.py
from typing import Optional


class TransportError(Exception):
    """Raised by a mailer when a message could not be handed to the mail server."""


class RateLimitExceededError(Exception):
    def __init__(self, limit: str, retry_after: Optional[int] = None):
        self.limit = limit
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded: {limit}")


class OriginNotAllowedError(Exception):
    def __init__(self, origin: str):
        self.origin = origin
        super().__init__(f"Origin {origin!r} is not allowed")
