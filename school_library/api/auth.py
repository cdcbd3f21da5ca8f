from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from school_library.api.deps import login_session, logout_session
from school_library.api.templating import render
from school_library.core.database import get_db
from school_library.services.auth import authenticate, INVALID_CREDENTIALS

router = APIRouter()


@router.get("/login")
def login_form(request: Request):
    return render(request, "login.html", {"error": None, "login_name": ""})


@router.post("/login")
def login(request: Request, bename: str = Form(""), passwort: str = Form(""),
          db: Session = Depends(get_db)):
    librarian = authenticate(db, bename, passwort)
    if librarian is None:
        # re-prompt, not a failure status
        return render(request, "login.html", {"error": INVALID_CREDENTIALS, "login_name": bename})
    login_session(request, librarian)
    return RedirectResponse("/admin", status_code=303)


@router.get("/logout")
def logout(request: Request):
    logout_session(request)
    return RedirectResponse("/", status_code=303)
