# portfolio_contact/common/cors.py

import logging

from fastapi import Request

from portfolio_contact.common.exceptions import OriginNotAllowedError

logger = logging.getLogger(__name__)


def require_allowed_origin(request: Request) -> None:
    """
    Reject browser requests coming from an origin that is not whitelisted.

    Requests without an Origin header (curl, mobile apps, server-to-server)
    are let through.
    """
    origin = request.headers.get("origin")
    if not origin:
        return
    if origin not in request.app.state.settings.ALLOWED_ORIGINS:
        logger.warning(f"Rejected request from origin {origin}")
        raise OriginNotAllowedError(origin)
