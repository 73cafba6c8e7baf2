"""
Google OAuth 2.0 authorization-code flow.

Only the pieces the login handshake needs: build the consent URL, swap the
returned code for an access token, read the user's profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "email", "profile")


class OAuthError(Exception):
    pass


@dataclass
class GoogleProfile:
    email: str
    name: str


class GoogleOAuthClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str,
    ) -> None:
        self._http = http_client
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id or "",
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        try:
            token_resp = await self._http.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id or "",
                    "client_secret": self.client_secret or "",
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            token_resp.raise_for_status()
            token_data = token_resp.json()
            access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
            if not access_token:
                raise OAuthError("Token response missing access_token")

            info_resp = await self._http.get(
                USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}
            )
            info_resp.raise_for_status()
            info = info_resp.json()
        except httpx.HTTPError as e:
            raise OAuthError(f"Google request failed: {e}") from e
        except ValueError as e:
            raise OAuthError("Google returned invalid JSON") from e

        if not isinstance(info, dict):
            raise OAuthError("Google profile is not a JSON object")

        email = str(info.get("email") or "").strip()
        if not email:
            raise OAuthError("Google profile has no email")

        name = str(info.get("name") or "").strip() or email.split("@")[0]
        return GoogleProfile(email=email, name=name)
