import argparse

from db.session import SessionLocal
from db.base import Base
from db.session import engine
from authentication.repository import create_user
from authentication.security import hash_password


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Create a dashboard user.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", default="admin", choices=["admin", "employee"])
    args = parser.parse_args(argv)

    if len(args.password) < 6:
        raise SystemExit("Password must be at least 6 characters long")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = create_user(
            db,
            identifier=args.email,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        if user is None:
            raise SystemExit("User already exists")
        db.commit()
        print(f"Created user: {user.username} ({user.role})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
