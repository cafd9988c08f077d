"""
Authenticated session handling against the web application.

Login yields an AuthSession (session cookie + CSRF token); every later call
attaches both. Logout invalidates the session on the server.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from flag_tenants.config.config import ServiceConfig
from flag_tenants.constants import CSRF_TOKEN_BODY_FIELD
from flag_tenants.exceptions import AuthenticationError, NetworkError, ParseError
from flag_tenants.monitoring.logger import get_logger
from flag_tenants.monitoring.redaction import redact

logger = get_logger(__name__)


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def body_for_log(response: requests.Response):
    """Response body with sensitive JSON fields (csrfToken, ...) masked."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    return redact(payload)


@dataclass
class AuthSession:
    """Session data extracted from a successful login."""
    session_id: str
    csrf_token: str
    cookies: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise AuthenticationError unless cookies, CSRF token and session id are all present."""
        if not self.cookies:
            raise AuthenticationError("Login response contained no cookies")
        if not self.csrf_token:
            raise AuthenticationError("Login response contained no CSRF token")
        if not self.session_id:
            raise AuthenticationError("Login response contained no session id")


class SessionManager:
    """
    Owns the HTTP session for one invocation.

    Responsibilities:
    - Log in and extract the session cookie and CSRF token
    - Build authenticated request arguments for other clients
    - Log out
    """

    def __init__(self, service: ServiceConfig, http: Optional[requests.Session] = None):
        self.service = service
        self.http = http if http is not None else requests.Session()

    def login(self, email: str, password: str) -> AuthSession:
        url = self.service.url(self.service.login_endpoint, public=True)
        try:
            response = self.http.post(
                url,
                json={"email": email, "password": password},
                timeout=self.service.request_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("Exception during login", url=url, error=str(e))
            raise NetworkError(f"Exception during login: {e}") from e

        logger.info("Login response", status_code=response.status_code, body=body_for_log(response))

        if not is_success(response):
            logger.error("Login failed", status_code=response.status_code, body=body_for_log(response))
            raise AuthenticationError(
                f"Login failed (status={response.status_code}, body={body_for_log(response)!r})"
            )

        cookies = requests.utils.dict_from_cookiejar(response.cookies)
        session = AuthSession(
            session_id=self.extract_session_id(cookies) or "",
            csrf_token=self.extract_csrf_token(response) or "",
            cookies=cookies,
        )
        session.validate()
        logger.info("Session established", cookie_names=sorted(cookies))
        return session

    def extract_csrf_token(self, response: requests.Response) -> Optional[str]:
        """Header first, then the csrfToken field of the JSON body."""
        token = response.headers.get(self.service.csrf_token_header)
        if token:
            return token
        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Failed to parse response body as JSON", body=response.text)
            raise ParseError("Failed to parse login response body as JSON") from e
        if not isinstance(payload, dict):
            return None
        token = payload.get(CSRF_TOKEN_BODY_FIELD)
        return str(token) if token is not None else None

    def extract_session_id(self, cookies: Dict[str, str]) -> Optional[str]:
        return cookies.get(self.service.session_cookie_name)

    def auth_kwargs(self, session: AuthSession) -> dict:
        """Cookie, CSRF header and timeout for an authenticated request."""
        return {
            "cookies": {self.service.session_cookie_name: session.session_id},
            "headers": {self.service.csrf_token_header: session.csrf_token},
            "timeout": self.service.request_timeout_seconds,
        }

    def logout(self, session: AuthSession) -> None:
        url = self.service.url(self.service.logout_endpoint)
        try:
            response = self.http.get(
                url,
                cookies={self.service.session_cookie_name: session.session_id},
                timeout=self.service.request_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("Exception during logout", url=url, error=str(e))
            raise NetworkError(f"Exception during logout: {e}") from e

        if not is_success(response):
            logger.error("Logout failed", status_code=response.status_code, body=response.text)
            raise NetworkError("Logout failed", status_code=response.status_code, body=response.text)

        logger.info("Logout successful", status_code=response.status_code)

    def close(self) -> None:
        self.http.close()
