"""
Users module interface.

The auth, plans and earnings modules depend on IUserStore, not on the
Supabase repository, so they can be exercised against an in-memory store.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import NewUser, UserRecord


@runtime_checkable
class IUserStore(Protocol):
    """Persistence contract for user records."""

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the user with this email, or None."""
        ...

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Return the user with this ID, or None."""
        ...

    def get_by_user_name(self, user_name: str) -> Optional[UserRecord]:
        """Return the user with this user name, or None."""
        ...

    def list_all(self) -> list[UserRecord]:
        """Return every user, oldest first."""
        ...

    def create(self, user: NewUser) -> UserRecord:
        """
        Insert a new user.

        Raises:
            DuplicateAccountError: If the email or user name is taken
        """
        ...

    def save(self, user: UserRecord) -> UserRecord:
        """
        Persist a modified user record.

        The write only applies if the stored version still equals
        `user.version`; the returned record carries the bumped version.

        Raises:
            ConcurrentUpdateError: If the stored version moved on
        """
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Returns False if no such user existed."""
        ...
