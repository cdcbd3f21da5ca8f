import logging
from typing import Optional

from sqlalchemy.orm import Session

from school_library.core.security import verify_password
from school_library.models import models
from school_library.schemas.schemas import CurrentLibrarian

logger = logging.getLogger("school_library.auth")

INVALID_CREDENTIALS = "Benutzername oder Passwort ist falsch."


def authenticate(db: Session, login_name: str, password: str) -> Optional[CurrentLibrarian]:
    """Return the librarian identity for valid credentials, otherwise None.

    An unknown login name and a wrong password are indistinguishable to the
    caller.
    """
    librarian = (db.query(models.Librarian)
                 .filter(models.Librarian.login_name == (login_name or "").strip())
                 .first())
    if not librarian or not verify_password(password or "", librarian.password_hash):
        logger.info("Failed login attempt")
        return None
    logger.info(f"Librarian {librarian.id} logged in")
    return CurrentLibrarian(id=librarian.id, name=f"{librarian.first_name} {librarian.last_name}")
