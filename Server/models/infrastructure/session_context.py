"""
CampusShare Server - Session Context Model

Dataclass for the identity resolved from a session token.
Built once per request by auth.GetSessionContext and passed explicitly
to every authenticated handler.
"""

from dataclasses import dataclass

from models.database import User


@dataclass
class SessionContext:
    """
    The authenticated caller of a single request
    The user row is re-read from the database on every request
    """
    user: User
    token: str

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username
