from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from session_seeder.config.settings import AuthSettings
from session_seeder.errors import ErrorCategory, TokenRequestError
from session_seeder.utils import get_logger, mask_username, sanitize_log_message

from .types import TokenResponse


logger = get_logger(__name__)

PASSWORD_GRANT = "password"
MAX_BODY_EXCERPT = 200

# Entra ID error codes that mean the credentials or client were rejected
_AUTHENTICATION_ERRORS = frozenset(
    {"invalid_grant", "invalid_client", "unauthorized_client"}
)


def build_token_request_form(settings: AuthSettings) -> dict[str, str]:
    """Form fields for a resource owner password credentials grant."""

    return {
        "grant_type": PASSWORD_GRANT,
        "client_id": settings.client_id,
        "client_secret": settings.client_secret,
        "scope": settings.requested_scope,
        "username": settings.username,
        "password": settings.password,
    }


class PasswordGrantClient:
    """Acquires tokens from the identity provider with the password grant.

    A single request is made per call; failures are raised, never retried.
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._http_client = http_client

    async def acquire(self, settings: AuthSettings) -> TokenResponse:
        if self._http_client is not None:
            return await self._request(self._http_client, settings)
        async with httpx.AsyncClient() as client:
            return await self._request(client, settings)

    async def _request(
        self, client: httpx.AsyncClient, settings: AuthSettings
    ) -> TokenResponse:
        endpoint = settings.token_endpoint
        logger.debug(
            "Requesting token with password grant",
            endpoint=endpoint,
            client_id=settings.client_id,
            username=mask_username(settings.username),
            scope=settings.requested_scope,
        )
        try:
            response = await client.post(
                endpoint,
                data=build_token_request_form(settings),
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as exc:
            logger.error(
                "Token request failed before a response was received",
                endpoint=endpoint,
                error=type(exc).__name__,
            )
            raise TokenRequestError(
                f"Network error requesting token from {endpoint}: {exc}",
                category=ErrorCategory.NETWORK,
                inner_error=exc,
            ) from exc

        if not response.is_success:
            error = _map_response_to_error(response)
            logger.error(
                "Token endpoint returned an error",
                endpoint=endpoint,
                status_code=response.status_code,
                code=error.code,
                description=error.description,
                correlation_id=error.correlation_id,
            )
            raise error

        try:
            token_response = TokenResponse.from_body(response.json())
        except (ValueError, ValidationError) as exc:
            raise TokenRequestError(
                f"Token endpoint returned an unexpected payload: {exc}",
                category=ErrorCategory.VALIDATION,
                status_code=response.status_code,
                inner_error=exc,
            ) from exc

        logger.info(
            "Acquired token with password grant",
            endpoint=endpoint,
            expires_in=token_response.expires_in,
        )
        return token_response


def _map_response_to_error(response: httpx.Response) -> TokenRequestError:
    status = response.status_code
    body: dict[str, Any] = {}
    try:
        parsed = response.json()
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        body = parsed

    code = body.get("error")
    code = code if isinstance(code, str) else None
    description = body.get("error_description")
    if isinstance(description, str):
        description = sanitize_log_message(description)
    else:
        description = None
    correlation_id = body.get("correlation_id")
    correlation_id = correlation_id if isinstance(correlation_id, str) else None

    if code in _AUTHENTICATION_ERRORS or status == 401:
        category = ErrorCategory.AUTHENTICATION
    elif 400 <= status <= 499:
        category = ErrorCategory.VALIDATION
    else:
        category = ErrorCategory.UNKNOWN

    summary = description or _body_excerpt(response.text) or "no response body"
    return TokenRequestError(
        f"Token request failed with status {status}: {code or 'error'}: {summary}",
        category=category,
        status_code=status,
        code=code,
        description=description,
        correlation_id=correlation_id,
    )


def _body_excerpt(text: str) -> str:
    excerpt = sanitize_log_message(text).strip()
    if len(excerpt) > MAX_BODY_EXCERPT:
        return excerpt[:MAX_BODY_EXCERPT] + "..."
    return excerpt


__all__ = ["PASSWORD_GRANT", "PasswordGrantClient", "build_token_request_form"]
