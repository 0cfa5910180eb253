"""Demo login check. There are no real accounts; one hardcoded credential unlocks the app."""

import hmac


class DemoAuthService:
    """Validates a username/password pair against the configured demo credential."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    def authenticate(self, username: str, password: str) -> bool:
        """True only for an exact match of both username and password."""
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        return user_ok and password_ok
