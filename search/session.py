"""
Logged-in user banner and logout for the authenticated variant of the screen.
No authorization happens here; the token is only forwarded on logout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from directory.client import DirectoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    username: str
    email: str
    token: str


def welcome_message(user: User) -> str:
    return f"Bem-vindo, {user.username or user.email}!"


class Session:
    def __init__(self, api, user: User, on_logout: Optional[Callable[[], None]] = None):
        self.api = api
        self.user = user
        self.on_logout = on_logout

    @property
    def welcome(self) -> str:
        return welcome_message(self.user)

    def logout(self) -> None:
        """Fire-and-forget: the local logout always happens."""
        try:
            self.api.logout(self.user.token)
        except DirectoryError as e:
            logger.warning(f"Logout endpoint failed (ignored): {e}")
        finally:
            if self.on_logout is not None:
                self.on_logout()
