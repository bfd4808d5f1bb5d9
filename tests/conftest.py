"""
Portfolio Contact API test configuration and fixtures.
Shared pytest fixtures for all test modules.
"""
import os

# Settings are read at import time, so the required values must exist first.
os.environ.setdefault("OWNER_EMAIL", "owner@portfolio.dev")
os.environ.setdefault("SMTP_HOST", "")

from typing import AsyncGenerator, Iterable, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_contact.common.config import Settings
from portfolio_contact.common.exceptions import TransportError
from portfolio_contact.common.rate_limit import RateLimiter
from portfolio_contact.common.utils.email_service import OutboundEmail
from portfolio_contact.main import create_app
from portfolio_contact.modules.contact.schemas import ContactSubmission


class RecordingMailer:
    """Mailer double that records every attempt and fails on the given attempt numbers (1-based)."""

    def __init__(self, fail_on: Iterable[int] = ()):
        self.fail_on = set(fail_on)
        self.attempts: List[OutboundEmail] = []
        self.sent: List[OutboundEmail] = []

    async def send(self, email: OutboundEmail) -> None:
        self.attempts.append(email)
        if len(self.attempts) in self.fail_on:
            raise TransportError("SMTP unavailable: 535 authentication failed for owner@portfolio.dev")
        self.sent.append(email)


# =============================================================================
# Settings and collaborators
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ENV="test",
        OWNER_EMAIL="owner@portfolio.dev",
        OWNER_EMAIL_PASS="app-password",
        SMTP_HOST="",
        FRONTEND_URL="http://localhost:3000",
        OWNER_SENDER_NAME="Portfolio Contact",
        SITE_NAME="Jane's Studio",
        CONTACT_RATE_LIMIT="5/15 minutes",
        CONTACT_ACCEPT_PARTIAL_DELIVERY=False,
    )


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def rate_limiter(test_settings) -> RateLimiter:
    return RateLimiter(test_settings.CONTACT_RATE_LIMIT)


@pytest.fixture
def valid_payload() -> dict:
    return {
        "name": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "message": "Hello, I would like to talk about a project.",
    }


@pytest.fixture
def submission() -> ContactSubmission:
    return ContactSubmission(
        name="Jane Doe",
        email="jane.doe@gmail.com",
        message="Hello, I would like to talk about a project.",
    )


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(test_settings, mailer, rate_limiter):
    return create_app(settings=test_settings, mailer=mailer, rate_limiter=rate_limiter)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
