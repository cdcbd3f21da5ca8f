import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from school_library.api import auth, routes
from school_library.api.templating import render
from school_library.core.config import SECRET_KEY, SESSION_COOKIE, configure_logging
from school_library.core.database import Base, engine
from school_library.core.errors import NotFound, PreconditionFailed, LoginRequired

configure_logging()
logger = logging.getLogger("school_library")

INVALID_INPUT = "Ungültige Eingabe: bitte alle Pflichtfelder ausfüllen."

Base.metadata.create_all(bind=engine)
app = FastAPI(title="Schulbibliothek")
app.add_middleware(SessionMiddleware, secret_key=SECRET_KEY, session_cookie=SESSION_COOKIE)
app.include_router(auth.router)
app.include_router(routes.router)
app.include_router(routes.admin)


@app.exception_handler(LoginRequired)
def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse("/login", status_code=303)


@app.exception_handler(NotFound)
def not_found_handler(request: Request, exc: NotFound):
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return render(request, "error.html", {"message": exc.message}, status_code=404)


@app.exception_handler(PreconditionFailed)
def precondition_failed_handler(request: Request, exc: PreconditionFailed):
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return render(request, "error.html", {"message": exc.message}, status_code=400)


@app.exception_handler(RequestValidationError)
def invalid_input_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(str(err["loc"][-1]) for err in exc.errors())
    logger.info(f"{request.method} {request.url.path}: invalid input ({fields})")
    return render(request, "error.html", {"message": INVALID_INPUT}, status_code=400)


@app.exception_handler(SQLAlchemyError)
def store_failure_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return render(request, "error.html", {"message": "Datenbankfehler."}, status_code=500)


@app.get("/health")
def health():
    return {"status": "ok"}
