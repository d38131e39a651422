import logging

from app.mailadmin.core.config import settings
from app.mailadmin.core.security import get_password_hash
from app.mailadmin.db.models import Base, User
from app.mailadmin.repos.users import UserRepository

logger = logging.getLogger(__name__)


def init_schema(engine) -> None:
    Base.metadata.create_all(engine)


def run_seed(db) -> User:
    repo = UserRepository(db)
    admin = repo.get_by_username(settings.ADMIN_USERNAME)
    if admin is not None:
        return admin
    admin = repo.create(
        username=settings.ADMIN_USERNAME,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        admin=True,
        active=True,
    )
    logger.info("Seeded bootstrap admin user %s", admin.username)
    return admin
