"""Sign-in, session validation and sign-out against the iGEM auth endpoints."""

from __future__ import annotations

import logging

from igem_uploader._internal.transport import SESSION_COOKIE, ApiTransport, RequestMethod
from igem_uploader.config import is_debug
from igem_uploader.exceptions import AuthenticationError
from igem_uploader.models import UserInfo

logger = logging.getLogger(__name__)


class AuthHandler:
    """Issues and revokes session tokens."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    def sign_in(self, username: str, password: str) -> str:
        """Sign in and return the session token.

        Args:
            username: Account username or email
            password: Account password

        Returns:
            The session token taken from the ``session`` cookie

        Raises:
            AuthenticationError: If the service rejects the credentials or
                sets no session cookie
        """
        logger.info(f"Signing in as {username}...")
        response = self._transport.send_request(
            ["auth", "sign-in"],
            RequestMethod.POST,
            json={"identifier": username, "password": password},
        )
        ApiTransport.assert_status_code(
            response, 201, "Sign in failed!", error_class=AuthenticationError
        )

        token = response.cookies.get(SESSION_COOKIE)
        self._transport.clear_cookies()
        if not token:
            raise AuthenticationError("Login failed!")

        if is_debug():
            logger.debug(f"Received session token: {token}")
        else:
            logger.info("Received session token.")
        return token

    def authenticate(self, session_token: str) -> UserInfo:
        """Validate a session token and return the signed-in user."""
        logger.info("Authenticating...")
        response = self._transport.send_request(
            ["auth", "me"], RequestMethod.GET, session_token=session_token
        )
        ApiTransport.assert_status_code(
            response, 200, "Authentication failed!", error_class=AuthenticationError
        )
        return UserInfo.from_api(response.json())

    def sign_out(self, session_token: str) -> None:
        logger.info("Signing out...")
        response = self._transport.send_request(
            ["auth", "sign-out"], RequestMethod.POST, session_token=session_token
        )
        ApiTransport.assert_status_code(response, 201, "Sign out failed!")
