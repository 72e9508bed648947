import pytest

from todo_auth.adapter.repositories.user_repository import UserRepository
from todo_auth.domain.entities import User
from todo_auth.domain.errors import DuplicateEmailError


def new_user(email="ann@acme.com") -> User:
    return User(email=email, name="Ann", password_hash="h" * 128, password_salt="s" * 64)


@pytest.mark.asyncio
async def test_create_rejects_duplicate_email(db_session):
    """Concurrent Registration

    Given a user was committed with an email
    When a second insert with the same email reaches the store
    Then the unique constraint surfaces as DuplicateEmailError
    And the session can still be used afterwards
    """
    users = UserRepository(db_session)
    await users.create(new_user())
    await db_session.commit()

    with pytest.raises(DuplicateEmailError):
        await users.create(new_user())

    assert await users.get_by_email("ann@acme.com") is not None
    await users.create(new_user("bob@acme.com"))
    await db_session.commit()
    assert await users.get_by_email("bob@acme.com") is not None
