from __future__ import annotations

import uuid
from typing import Any

import bcrypt

# Stable ids so a user's signals survive logout / login
_USER_NAMESPACE = uuid.UUID("6f1c2e0a-3b7d-4c55-9a1e-5d2f8b7c4e10")

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def user_id_for(username: str) -> str:
    return str(uuid.uuid5(_USER_NAMESPACE, username))


def _add_user(username: str, password: str, role: str) -> None:
    _users[username] = {
        "user_id": user_id_for(username),
        "password_hash": _hash_password(password),
        "role": role,
    }


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    _add_user("diner", "diner123", "user")
    _add_user("admin", "admin123", "admin")


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{user_id, username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {"user_id": record["user_id"], "username": username, "role": record["role"]}
    return None


_seed_users()
