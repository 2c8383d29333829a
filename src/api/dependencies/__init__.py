import logging
import secrets
from typing import Annotated

from fastapi import Depends, Header, Request

from config import AppSettings, config
from services.quote_facade import QuoteFacade

logger = logging.getLogger(__name__)


class ApiKeyRejected(Exception):
    def __init__(self, message: str, error: str) -> None:
        super().__init__(message)
        self.message = message
        self.error = error


def get_settings() -> AppSettings:
    return config()


def get_facade(request: Request) -> QuoteFacade:
    return request.app.state.facade


def require_api_key(
    request: Request,
    settings: Annotated[AppSettings, Depends(get_settings)],
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    provided = (x_api_key or "").strip()
    client = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")

    if not provided:
        logger.warning("Request without API key ip=%s user_agent=%s url=%s", client, user_agent, request.url)
        raise ApiKeyRejected("API key requerida", "X-API-KEY header no encontrado")

    expected = settings.api_key
    if not expected or not secrets.compare_digest(provided.encode(), expected.encode()):
        logger.warning(
            "Request with invalid API key ip=%s user_agent=%s url=%s provided_key=%s...",
            client,
            user_agent,
            request.url,
            provided[:8],
        )
        raise ApiKeyRejected("API key inválida", "La API key proporcionada no es válida")

    logger.info("Authorized API access ip=%s url=%s", client, request.url)
