"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from typing import Optional
import sys
import logging
import os

from fastapi import Request

from ..config import settings

# Configure file and stdout logging
handlers = [logging.StreamHandler(sys.stdout)]

# Try to add file handler, but continue without it if directory creation fails
if settings.LOG_DIR:
    try:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, "auth_events.log")))
    except OSError as e:
        print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s:%(message)s",
    handlers=handlers
)

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "registration",
    "login_success",
    "login_failure",
}


def client_ip(request: Optional[Request]) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For hop."""
    if request is None:
        return None

    ip_address = None
    if request.client:
        ip_address = request.client.host

    # X-Forwarded-For can contain multiple IPs, take the first one
    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    username: str,
    request: Optional[Request] = None,
    metadata: Optional[dict] = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: registration, login_success, login_failure
        username: Username the event is about
        request: FastAPI Request object, if the event came from an HTTP call
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    user_agent = request.headers.get("user-agent") if request is not None else None

    logger.info(
        "AUTH %s username=%s ip=%s user_agent=%s timestamp=%s metadata=%s",
        event_type, username, client_ip(request), user_agent,
        datetime.now(timezone.utc).isoformat(), metadata or {}
    )
