from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from school_library.core.database import get_db
from school_library.core.errors import LoginRequired
from school_library.models import models
from school_library.schemas.schemas import CurrentLibrarian

SESSION_LIBRARIAN_ID = "librarian_id"
SESSION_LIBRARIAN_NAME = "librarian_name"


def get_current_librarian(request: Request) -> Optional[CurrentLibrarian]:
    librarian_id = request.session.get(SESSION_LIBRARIAN_ID)
    if librarian_id is None:
        return None
    return CurrentLibrarian(id=librarian_id, name=request.session.get(SESSION_LIBRARIAN_NAME, ""))


def require_librarian(request: Request,
                      librarian: Optional[CurrentLibrarian] = Depends(get_current_librarian),
                      db: Session = Depends(get_db)) -> CurrentLibrarian:
    if librarian is None:
        raise LoginRequired()
    # the account may have been removed since login, e.g. by a schema reset
    if db.get(models.Librarian, librarian.id) is None:
        logout_session(request)
        raise LoginRequired()
    return librarian


def login_session(request: Request, librarian: CurrentLibrarian) -> None:
    request.session.clear()
    request.session[SESSION_LIBRARIAN_ID] = librarian.id
    request.session[SESSION_LIBRARIAN_NAME] = librarian.name


def logout_session(request: Request) -> None:
    request.session.clear()
