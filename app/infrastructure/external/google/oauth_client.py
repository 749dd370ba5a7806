"""Google OAuth 2.0 / OpenID Connect client for sign-in.

Builds the consent URL, exchanges the authorization code, and reads the
OpenID userinfo (stable 'sub', email, name). The resulting identity is
handed to AuthService.oauth_login; nothing here touches the credential
store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar
from urllib.parse import urlencode

import httpx

from app.domain.exceptions import AuthenticationException, ServiceUnavailableException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _json_body(response: httpx.Response, step: str) -> dict[str, Any]:
    """Decode a 200 reply from Google; anything but a JSON object is unavailable."""
    try:
        data = response.json()
    except ValueError as e:
        logger.error("Google %s returned a non-JSON body", step)
        raise ServiceUnavailableException("google_oauth") from e
    if not isinstance(data, dict):
        logger.error("Google %s returned unexpected JSON", step)
        raise ServiceUnavailableException("google_oauth")
    return data


@dataclass(frozen=True)
class GoogleUserInfo:
    """Normalized Google identity."""

    subject: str
    email: str
    email_verified: bool
    name: str | None = None


class GoogleOAuthClient:
    """Authorization-code flow against Google's OAuth endpoints."""

    AUTHORIZATION_ENDPOINT: ClassVar[str] = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_ENDPOINT: ClassVar[str] = "https://oauth2.googleapis.com/token"
    USERINFO_ENDPOINT: ClassVar[str] = "https://openidconnect.googleapis.com/v1/userinfo"
    SCOPES: ClassVar[tuple[str, ...]] = ("openid", "email", "profile")

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._http_client = http_client

    def build_authorization_url(self, state: str) -> str:
        """Build the Google consent URL carrying our signed state."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.SCOPES),
            "state": state,
            "prompt": "select_account",
        }
        return f"{self.AUTHORIZATION_ENDPOINT}?{urlencode(params)}"

    async def _post(self, url: str, data: dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, data=data)
        async with httpx.AsyncClient(timeout=30.0) as client:
            return await client.post(url, data=data)

    async def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, headers=headers)
        async with httpx.AsyncClient(timeout=30.0) as client:
            return await client.get(url, headers=headers)

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        Raises:
            AuthenticationException: Google rejected the code.
            ServiceUnavailableException: Google could not be reached.
        """
        try:
            response = await self._post(
                self.TOKEN_ENDPOINT,
                {
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
        except httpx.HTTPError as e:
            logger.error("Google token exchange transport error: %s", type(e).__name__)
            raise ServiceUnavailableException("google_oauth") from e
        if response.status_code != 200:
            logger.warning("Google token exchange failed: status=%d", response.status_code)
            raise AuthenticationException("Google sign-in failed")
        access_token = _json_body(response, "token exchange").get("access_token")
        if not access_token:
            raise AuthenticationException("Google sign-in failed")
        return str(access_token)

    async def get_user_info(self, access_token: str) -> GoogleUserInfo:
        """Fetch the OpenID userinfo for an access token.

        Raises:
            AuthenticationException: token rejected, or sub/email missing.
            ServiceUnavailableException: Google could not be reached.
        """
        try:
            response = await self._get(
                self.USERINFO_ENDPOINT,
                {"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error("Google userinfo transport error: %s", type(e).__name__)
            raise ServiceUnavailableException("google_oauth") from e
        if response.status_code != 200:
            logger.warning("Google userinfo failed: status=%d", response.status_code)
            raise AuthenticationException("Google sign-in failed")
        data = _json_body(response, "userinfo")
        subject = data.get("sub")
        email = data.get("email")
        if not subject or not email:
            raise AuthenticationException("Email not provided by Google profile")
        return GoogleUserInfo(
            subject=str(subject),
            email=str(email),
            email_verified=bool(data.get("email_verified", False)),
            name=data.get("name"),
        )

    async def authenticate(self, code: str) -> GoogleUserInfo:
        """Code → access token → verified identity.

        Raises:
            AuthenticationException: also when Google has not verified the email.
        """
        user_info = await self.get_user_info(await self.exchange_code(code))
        if not user_info.email_verified:
            raise AuthenticationException("Google account email is not verified")
        return user_info
