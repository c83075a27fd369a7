from dataclasses import dataclass

from starter.database import Database
from starter.services.users import UserService


@dataclass
class AppDeps:
    """Collaborators handed to every handler through RequestContext.deps"""

    db: Database
    users: UserService


def build_deps(database: Database) -> AppDeps:
    return AppDeps(db=database, users=UserService(database))
