"""
Password hashing and signed session tokens.
"""
import asyncio
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from mapmate.core.config import settings

BCRYPT_ROUNDS = 10


async def hash_password(password: str) -> str:
    # bcrypt is CPU bound, keep it off the event loop
    hashed = await asyncio.to_thread(
        bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    )
    return hashed.decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(
        bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8")
    )


def create_access_token(user_id: str, secret: str = None, expires_minutes: int = None) -> str:
    expires = timedelta(minutes=expires_minutes or settings.JWT_EXPIRES_MINUTES)
    payload = {
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + expires,
    }
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, secret: str = None) -> dict:
    return jwt.decode(token, secret or settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
