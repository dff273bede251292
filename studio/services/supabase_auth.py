"""
Supabase Auth adapter
---------------------
Thin client over the hosted Supabase Auth (GoTrue) REST API. Every page that
signs a user up, in or out goes through here, so the routes never build
provider URLs or parse provider payloads themselves.
"""

import base64
import hashlib
import secrets
from urllib.parse import urlencode

import requests
from flask import current_app

from ..metrics import AUTH_REQUESTS_TOTAL, AUTH_REQUEST_DURATION_SECONDS


class AuthProviderError(Exception):
    """Raised when Supabase Auth rejects a request or cannot be reached."""

    def __init__(self, message, status_code=None, error_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code

    @property
    def is_email_not_confirmed(self):
        return self.error_code == 'email_not_confirmed' or 'email not confirmed' in self.message.lower()


def generate_pkce_pair():
    """Returns a (code_verifier, code_challenge) pair for the S256 PKCE flow."""
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode('ascii')).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b'=').decode('ascii')
    return verifier, challenge


class SupabaseAuthClient:
    """
    Calls the Supabase Auth endpoints under ``{SUPABASE_URL}/auth/v1``.
    Responses are returned as plain dicts exactly as the provider sends them.
    """

    def __init__(self, base_url, api_key, timeout=10):
        if not base_url or not api_key:
            raise AuthProviderError("Supabase Auth is not configured.")
        self.base_url = f"{base_url.rstrip('/')}/auth/v1"
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(config.get('SUPABASE_URL'), config.get('SUPABASE_ANON_KEY'), config.get('SUPABASE_TIMEOUT', 10))

    def _headers(self, access_token=None):
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, operation, method, path, params=None, json=None, access_token=None):
        url = f"{self.base_url}{path}"
        with AUTH_REQUEST_DURATION_SECONDS.labels(operation=operation).time():
            try:
                response = requests.request(
                    method, url,
                    params=params,
                    json=json,
                    headers=self._headers(access_token),
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                AUTH_REQUESTS_TOTAL.labels(operation=operation, status='unreachable').inc()
                current_app.logger.error(f"Supabase Auth '{operation}' request failed: {e}")
                raise AuthProviderError("Failed to connect to the authentication service.") from e

        AUTH_REQUESTS_TOTAL.labels(operation=operation, status=str(response.status_code)).inc()

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {}

        if not response.ok:
            message = (
                payload.get('msg')
                or payload.get('error_description')
                or payload.get('message')
                or payload.get('error')
                or f"Authentication request failed ({response.status_code})"
            )
            error_code = payload.get('error_code') or payload.get('code')
            current_app.logger.warning(f"Supabase Auth '{operation}' returned {response.status_code}: {message}")
            raise AuthProviderError(message, status_code=response.status_code, error_code=error_code)

        return payload

    # --- Sign up / sign in ---

    def sign_up(self, email, password, full_name=None, redirect_to=None, code_challenge=None):
        body = {"email": email, "password": password, "data": {"full_name": full_name} if full_name else {}}
        if code_challenge:
            body.update({"code_challenge": code_challenge, "code_challenge_method": "s256"})
        params = {"redirect_to": redirect_to} if redirect_to else None
        return self._request('sign_up', 'POST', '/signup', params=params, json=body)

    def sign_in_with_password(self, email, password):
        return self._request(
            'sign_in', 'POST', '/token',
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    def authorize_url(self, provider, redirect_to, code_challenge):
        """Builds the URL the browser is sent to for an OAuth sign-in."""
        query = urlencode({
            "provider": provider,
            "redirect_to": redirect_to,
            "code_challenge": code_challenge,
            "code_challenge_method": "s256",
        })
        return f"{self.base_url}/authorize?{query}"

    def exchange_code_for_session(self, auth_code, code_verifier):
        return self._request(
            'exchange_code', 'POST', '/token',
            params={"grant_type": "pkce"},
            json={"auth_code": auth_code, "code_verifier": code_verifier},
        )

    def refresh_session(self, refresh_token):
        return self._request(
            'refresh', 'POST', '/token',
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    # --- Account maintenance ---

    def reset_password_for_email(self, email, redirect_to=None, code_challenge=None):
        body = {"email": email}
        if code_challenge:
            body.update({"code_challenge": code_challenge, "code_challenge_method": "s256"})
        params = {"redirect_to": redirect_to} if redirect_to else None
        return self._request('recover', 'POST', '/recover', params=params, json=body)

    def update_user(self, access_token, attributes):
        return self._request('update_user', 'PUT', '/user', json=attributes, access_token=access_token)

    def resend_signup(self, email, redirect_to=None):
        params = {"redirect_to": redirect_to} if redirect_to else None
        return self._request('resend', 'POST', '/resend', params=params, json={"type": "signup", "email": email})

    def sign_out(self, access_token):
        return self._request('sign_out', 'POST', '/logout', access_token=access_token)


def get_auth_client():
    """Returns an auth client built from the current app's configuration."""
    return SupabaseAuthClient.from_config(current_app.config)
