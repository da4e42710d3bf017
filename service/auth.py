"""HTTP basic auth for the stats surface."""

import secrets

from fastapi import HTTPException, status
from fastapi.security import HTTPBasic

basic_security = HTTPBasic()


class StatsAuth:
    """Checks basic-auth credentials against the service config.

    With no password configured every request is refused.
    """

    __slots__ = ("username", "password")

    def __init__(self, username, password=None):
        self.username = username
        self.password = password

    @classmethod
    def from_config(cls, config):
        return cls(config.username, config.password)

    def verify(self, credentials):
        if self.password is None:
            raise _unauthorized("Stats access is not configured")
        username_ok = secrets.compare_digest(credentials.username.encode(), self.username.encode())
        password_ok = secrets.compare_digest(credentials.password.encode(), self.password.encode())
        if not (username_ok and password_ok):
            raise _unauthorized("Invalid credentials")
        return credentials.username


def _unauthorized(detail):
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )
