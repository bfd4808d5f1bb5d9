# portfolio_contact/common/dependencies.py

from fastapi import Request

from portfolio_contact.common.config import Settings
from portfolio_contact.common.utils.email_service import Mailer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
