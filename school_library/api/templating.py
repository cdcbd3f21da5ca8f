from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def render(request: Request, name: str, context: dict = None, status_code: int = 200):
    context = dict(context or {})
    context.setdefault("librarian_name", request.session.get("librarian_name"))
    return templates.TemplateResponse(request, name, context, status_code=status_code)
