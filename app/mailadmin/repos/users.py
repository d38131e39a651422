from sqlalchemy import select

from app.mailadmin.core.resources import ResourceColumn, ResourceDefinition
from app.mailadmin.db.models import User

USER_RESOURCE = ResourceDefinition(
    name="users",
    model=User,
    identity=User.username,
    columns=(
        ResourceColumn("username", User.username, searchable=True),
        ResourceColumn("admin", User.admin),
        ResourceColumn("active", User.active),
        ResourceColumn("created_at", User.created_at, title="Created"),
    ),
)


class UserRepository:
    def __init__(self, db):
        self.db = db

    def get_by_username(self, username: str):
        stmt = select(User).where(User.username == username)
        return self.db.execute(stmt).scalars().first()

    def create(self, *, username: str, password_hash: str, admin: bool, active: bool):
        user = User(username=username, password_hash=password_hash, admin=admin, active=active)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: User):
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()

    def update_password(self, user: User, password_hash: str):
        user.password_hash = password_hash
        return self.save(user)
