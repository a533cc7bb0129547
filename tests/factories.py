from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from .models import Reply, User


def create_users(session: Session, count: int) -> list[User]:
    users = [User(name=f'user-{i}') for i in range(1, count + 1)]
    session.add_all(users)
    session.flush()
    return users


def create_replies(session: Session, rows: Iterable[dict[str, Any]]) -> list[Reply]:
    """
    < Insert replies in the given order, so ids are assigned 1, 2, 3, ... >
    1. Make sure there is a user to own the replies.
    2. Insert one reply per row dict (missing fields use the model defaults).
    """
    # 1
    user = session.get(User, 1) or create_users(session, 1)[0]

    # 2
    replies = []
    for row in rows:
        reply = Reply(**{'user_id': user.id, **row})
        session.add(reply)
        session.flush()
        replies.append(reply)
    session.commit()
    return replies


def create_replies_by_year(session: Session, years: Iterable[int]) -> list[Reply]:
    return create_replies(session, [{'created_at': datetime(year, 1, 1)} for year in years])
