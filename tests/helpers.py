"""Builders shared across test modules."""

import uuid
from typing import Optional

from storefront_admin.features.auth.entities import AuthenticatedUser
from storefront_admin.features.permissions.entities import Grant, Role

TEST_PASSWORD = "correct-horse-battery"


def new_id() -> str:
    return str(uuid.uuid4())


def role_with(*grants: Grant, name: str = "custom") -> Role:
    """A detached role carrying the given grants."""
    return Role(id=new_id(), name=name, display_name=name.title(), grants=list(grants))


def user_with_role(role: Optional[Role]) -> AuthenticatedUser:
    return AuthenticatedUser(id=new_id(), email="someone@example.com", first_name="Some",
                             last_name="One", role=role)
