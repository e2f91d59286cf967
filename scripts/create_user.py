"""
Create a verified user for development
"""
import argparse
import asyncio
import uuid

from fastapi_users.password import PasswordHelper
from sqlalchemy import select

from pet_registry.database import get_async_session
from pet_registry.models.user import User


async def create_user(email: str, password: str, name: str) -> None:
    password_helper = PasswordHelper()

    async for session in get_async_session():
        result = await session.execute(select(User).where(User.email == email))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            print(f"User {email} already exists (id={existing_user.id})")
            return

        new_user = User(
            id=uuid.uuid4(),
            email=email,
            hashed_password=password_helper.hash(password),
            is_active=True,
            is_superuser=False,
            is_verified=True,  # Auto-verify for development
            name=name
        )

        session.add(new_user)
        await session.commit()

        print(f"User created: {email} (id={new_user.id})")
        print("Login at POST /v1/auth/jwt/login with these credentials")
        break


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="Development User")
    args = parser.parse_args()

    asyncio.run(create_user(args.email, args.password, args.name))


if __name__ == "__main__":
    main()
