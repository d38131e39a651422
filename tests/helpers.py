from datetime import datetime, timedelta, timezone

from app.mailadmin.core.security import get_password_hash
from app.mailadmin.db.models import Alias, User

ADMIN_PASSWORD = "admin-password-123"
USER_PASSWORD = "user-password-123"
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def create_user(db_session, username: str, *, password: str = USER_PASSWORD, admin: bool = False, active: bool = True, offset: int = 0):
    user = User(
        username=username,
        password_hash=get_password_hash(password),
        admin=admin,
        active=active,
        created_at=BASE_TIME + timedelta(minutes=offset),
    )
    db_session.add(user)
    db_session.commit()
    return user


def create_alias(db_session, address: str, *, target: str = "inbox@example.com", comment: str = "", active: bool = True, offset: int = 0):
    alias = Alias(
        address=address,
        target=target,
        comment=comment,
        active=active,
        created_at=BASE_TIME + timedelta(minutes=offset),
    )
    db_session.add(alias)
    db_session.commit()
    return alias


def login(client, username: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def admin_headers(client) -> dict:
    return login(client, "admin", ADMIN_PASSWORD)
