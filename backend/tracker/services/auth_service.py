import logging
import threading
from typing import Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tracker import schemas
from tracker.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_retry_transport = retry(
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=4, max=10),
    reraise=True
)


class AuthService:
    """Client for the hosted backend's auth API.

    Holds the current session (access + refresh token) in memory. Sign-in and
    refresh replace it, sign-out drops it.
    """

    def __init__(self, base_url: str, api_key: str, http: requests.Session = None, timeout: float = 10):
        self.base_url = f"{base_url.rstrip('/')}/auth/v1"
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()
        self._session: Optional[schemas.AuthSession] = None
        self._lock = threading.Lock()

    @property
    def session(self) -> Optional[schemas.AuthSession]:
        return self._session

    def _headers(self, access_token: str = None) -> dict:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    @_retry_transport
    def _request(self, method: str, path: str, access_token: str = None, **kwargs) -> dict:
        response = self.http.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(access_token),
            timeout=self.timeout,
            **kwargs
        )
        if response.status_code >= 400:
            raise AuthenticationError(_error_message(response))
        if not response.content:
            return {}
        return response.json()

    def _store_session(self, data: dict) -> schemas.AuthSession:
        session = schemas.AuthSession(**data)
        with self._lock:
            self._session = session
        return session

    def sign_in_with_password(self, email: str, password: str) -> schemas.AuthSession:
        data = self._request(
            "POST", "/token", params={"grant_type": "password"},
            json={"email": email, "password": password}
        )
        session = self._store_session(data)
        logger.info(f"Signed in as {email}")
        return session

    def sign_up(self, email: str, password: str) -> Optional[schemas.AuthSession]:
        data = self._request("POST", "/signup", json={"email": email, "password": password})
        logger.info(f"Signed up {email}")
        # With email confirmation enabled the backend returns only the user
        if "access_token" in data:
            return self._store_session(data)
        return None

    def sign_out(self):
        session = self._session
        if session is None:
            return
        try:
            self._request("POST", "/logout", access_token=session.access_token)
        finally:
            with self._lock:
                self._session = None
        logger.info("Signed out")

    def get_current_user(self) -> Optional[schemas.User]:
        session = self._session
        if session is None:
            return None
        data = self._request("GET", "/user", access_token=session.access_token)
        return schemas.User(**data)

    def refresh_session(self) -> Optional[schemas.AuthSession]:
        session = self._session
        if session is None or not session.refresh_token:
            logger.debug("No session to refresh")
            return None
        data = self._request(
            "POST", "/token", params={"grant_type": "refresh_token"},
            json={"refresh_token": session.refresh_token}
        )
        logger.info("Session refreshed")
        return self._store_session(data)

    def close(self):
        self.http.close()


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    for key in ("error_description", "msg", "message", "error"):
        if body.get(key):
            return str(body[key])
    return f"HTTP {response.status_code}"


def initialize_demo_auth(auth: AuthService, email: str, password: str) -> bool:
    """Sign the demo user in, creating it when sign-in is refused."""
    try:
        auth.sign_in_with_password(email, password)
        logger.info("Demo user signed in successfully")
        return True
    except AuthenticationError as e:
        logger.info(f"Demo user not found ({e}), attempting to create...")
    except requests.RequestException as e:
        logger.error(f"Auth initialization error: {e}")
        return False

    try:
        session = auth.sign_up(email, password)
    except (AuthenticationError, requests.RequestException) as e:
        logger.error(f"Failed to create demo user: {e}")
        return False
    logger.info("Demo user created successfully")
    return session is not None
