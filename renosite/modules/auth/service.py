import requests

from ...core.logging_service import LoggingService


class AuthError(Exception):
    """Login rejected by the backend or backend unreachable."""


class AuthService:
    """Client for the backend's login endpoint"""

    def __init__(self, base_url: str, timeout: int = 15):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @property
    def login_endpoint(self) -> str:
        return f"{self.base_url}/api/auth/login"

    def login(self, username: str, password: str) -> dict:
        """
        Authenticate against the backend.

        Returns:
            Backend JSON, normally {"token": ..., "user": {...}}

        Raises:
            AuthError with the backend's message, or "Authentication failed: <status>"
        """
        try:
            res = requests.post(
                self.login_endpoint,
                json={'username': username, 'password': password},
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            LoggingService.error('auth', f"Login request failed: {e}")
            raise AuthError(f"Login service unavailable: {e}") from e

        LoggingService.log_api_call('auth', self.login_endpoint, 'POST', res.status_code)

        if not 200 <= res.status_code < 300:
            try:
                message = (res.json() or {}).get('message')
            except ValueError:
                message = None
            raise AuthError(message or f"Authentication failed: {res.status_code}")

        try:
            data = res.json()
        except ValueError as e:
            raise AuthError("Authentication failed: invalid response") from e

        if not data.get('token'):
            raise AuthError("Authentication failed: no token returned")
        return data
