from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from .factories import create_replies, create_users
from .models import Base


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine('sqlite://')
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine, expire_on_commit=False) as s:
        yield s


@pytest.fixture()
def ten_replies(session: Session) -> Session:
    """10 users (ids 1..10) and 10 replies (ids 1..10), one reply per user."""
    users = create_users(session, 10)
    create_replies(session, [{'user_id': u.id} for u in users])
    return session
