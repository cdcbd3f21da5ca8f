from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from typing import Optional

from school_library.api.deps import require_librarian
from school_library.api.templating import render
from school_library.core.database import get_db
from school_library.schemas import schemas
from school_library.schemas.schemas import CurrentLibrarian
from school_library.services import loans, queries, records

router = APIRouter()
admin = APIRouter(prefix="/admin", dependencies=[Depends(require_librarian)])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def book_filters(q: Optional[str] = Query(None),
                 kategorie: Optional[str] = Query(None),
                 verlag: Optional[str] = Query(None),
                 verfuegbar: Optional[str] = Query(None)) -> schemas.BookFilters:
    return schemas.BookFilters(q=q, category=kategorie, publisher=verlag, availability=verfuegbar)


def borrower_filters(name: Optional[str] = Query(None),
                     klasse: Optional[str] = Query(None)) -> schemas.BorrowerFilters:
    return schemas.BorrowerFilters(name=name, school_class=klasse)


def loan_filters(nurAktiv: Optional[str] = Query(None),
                 titel: Optional[str] = Query(None),
                 benutzer: Optional[str] = Query(None)) -> schemas.LoanFilters:
    return schemas.LoanFilters(active_only=(nurAktiv == "1"), title=titel, borrower=benutzer)


def _book_listing(request: Request, db: Session, filters: schemas.BookFilters, template: str):
    return render(request, template, {
        "books": queries.list_books(db, filters),
        "filters": filters,
        "categories": queries.distinct_categories(db),
        "publishers": queries.distinct_publishers(db),
    })


# -----------------------------
# Public catalogue
# -----------------------------
@router.get("/")
def index(request: Request, filters: schemas.BookFilters = Depends(book_filters), db: Session = Depends(get_db)):
    return _book_listing(request, db, filters, "index.html")


# -----------------------------
# Books (admin)
# -----------------------------
@admin.get("")
def admin_index(request: Request, filters: schemas.BookFilters = Depends(book_filters), db: Session = Depends(get_db)):
    return _book_listing(request, db, filters, "admin.html")


@admin.get("/books/new")
def new_book_form(request: Request):
    return render(request, "book_form.html", {
        "form_title": "Neues Buch anlegen",
        "form_action": "/admin/books/new",
        "book": None,
    })


@admin.post("/books/new")
def create_book(isbn: str = Form(...), titel: str = Form(...),
                beschreibung: str = Form(""), autor: str = Form(""),
                verlag: str = Form(""), kategorie: str = Form(""),
                apreis: str = Form(""), anzahlges: str = Form(""),
                db: Session = Depends(get_db)):
    form = schemas.BookForm(isbn=isbn, title=titel, description=beschreibung, author=autor,
                            publisher=verlag, category=kategorie, price=apreis,
                            total_copies=anzahlges)
    records.create_book(db, form)
    return _redirect("/admin")


@admin.get("/books/{book_id}/edit")
def edit_book_form(book_id: int, request: Request, db: Session = Depends(get_db)):
    book = records.get_book(db, book_id)
    return render(request, "book_form.html", {
        "form_title": "Buch bearbeiten",
        "form_action": f"/admin/books/{book_id}/edit",
        "book": book,
    })


@admin.post("/books/{book_id}/edit")
def update_book(book_id: int, isbn: str = Form(...), titel: str = Form(...),
                beschreibung: str = Form(""), autor: str = Form(""),
                verlag: str = Form(""), kategorie: str = Form(""),
                apreis: str = Form(""), anzahlges: str = Form(""),
                anzahlver: str = Form(""), db: Session = Depends(get_db)):
    form = schemas.BookForm(isbn=isbn, title=titel, description=beschreibung, author=autor,
                            publisher=verlag, category=kategorie, price=apreis,
                            total_copies=anzahlges, available_copies=anzahlver)
    records.update_book(db, book_id, form)
    return _redirect("/admin")


@admin.post("/books/{book_id}/delete")
def delete_book(book_id: int, db: Session = Depends(get_db)):
    records.delete_book(db, book_id)
    return _redirect("/admin")


# -----------------------------
# Borrowers
# -----------------------------
@admin.get("/benutzer")
def list_borrowers(request: Request, filters: schemas.BorrowerFilters = Depends(borrower_filters),
                   db: Session = Depends(get_db)):
    return render(request, "users.html", {
        "users": queries.list_borrowers(db, filters),
        "filters": filters,
    })


@admin.get("/benutzer/new")
def new_borrower_form(request: Request):
    return render(request, "user_form.html", {
        "form_title": "Neuen Benutzer anlegen",
        "form_action": "/admin/benutzer/new",
    })


@admin.post("/benutzer/new")
def create_borrower(vname: str = Form(...), name: str = Form(...),
                    klasse: str = Form(""), email: str = Form(""),
                    db: Session = Depends(get_db)):
    form = schemas.BorrowerForm(first_name=vname, last_name=name, school_class=klasse, email=email)
    records.create_borrower(db, form)
    return _redirect("/admin/benutzer")


@admin.post("/benutzer/{borrower_id}/delete")
def delete_borrower(borrower_id: int, db: Session = Depends(get_db)):
    records.delete_borrower(db, borrower_id)
    return _redirect("/admin/benutzer")


# -----------------------------
# Loans
# -----------------------------
@admin.get("/books/{book_id}/loan")
def loan_form(book_id: int, request: Request,
              filters: schemas.BorrowerFilters = Depends(borrower_filters),
              db: Session = Depends(get_db)):
    book = records.get_book(db, book_id)
    return render(request, "loan_form.html", {
        "book": book,
        "users": queries.list_borrowers(db, filters),
        "filters": filters,
    })


@admin.post("/books/{book_id}/loan")
def issue_loan(book_id: int, benutzer_id: int = Form(...),
               librarian: CurrentLibrarian = Depends(require_librarian),
               db: Session = Depends(get_db)):
    loans.issue_loan(db, book_id, benutzer_id, librarian.id)
    return _redirect("/admin/ausleihen")


@admin.get("/ausleihen")
def list_loans(request: Request, filters: schemas.LoanFilters = Depends(loan_filters),
               db: Session = Depends(get_db)):
    return render(request, "loans.html", {
        "loans": queries.list_loans(db, filters),
        "filters": filters,
    })


@admin.post("/ausleihen/{loan_id}/return")
def return_loan(loan_id: int, db: Session = Depends(get_db)):
    loans.return_loan(db, loan_id)
    return _redirect("/admin/ausleihen")
