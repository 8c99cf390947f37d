from sqlalchemy.orm import Session

from authentication.models import User


def _normalize_identifier(identifier: str) -> str:
    return (identifier or "").strip().lower()


def get_user_by_identifier(db: Session, identifier: str) -> User | None:
    return db.query(User).filter(User.username == _normalize_identifier(identifier)).first()


def create_user(db: Session, identifier: str, password_hash: str, role: str) -> User | None:
    if get_user_by_identifier(db, identifier) is not None:
        return None

    user = User(
        username=_normalize_identifier(identifier),
        password_hash=password_hash,
        role=role,
        is_active=True,
    )
    db.add(user)
    db.flush()
    return user
