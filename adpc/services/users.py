# adpc/services/users.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from adpc.models.user import User


def upsert_user(db: Session, *, email: str, name: Optional[str] = None) -> User:
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email, name=name)
        db.add(user)
    elif name is not None:
        user.name = name
    db.commit()
    db.refresh(user)
    return user
