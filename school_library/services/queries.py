"""Filtered listings for books, loans and borrowers.

Each listing starts from a fixed base query and appends one predicate per
non-blank filter. Filter values always travel as bound parameters.
"""
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from school_library.models import models
from school_library.schemas.schemas import BookFilters, LoanFilters, BorrowerFilters


def _contains(column, value):
    return column.contains(value, autoescape=True)


def book_query(db: Session, filters: BookFilters):
    query = db.query(models.Book)
    if filters.q:
        query = query.filter(or_(_contains(models.Book.title, filters.q),
                                 _contains(models.Book.description, filters.q),
                                 _contains(models.Book.author, filters.q)))
    if filters.category:
        query = query.filter(models.Book.category == filters.category)
    if filters.publisher:
        query = query.filter(models.Book.publisher == filters.publisher)
    if filters.availability == "1":
        query = query.filter(models.Book.available_copies > 0)
    elif filters.availability == "0":
        query = query.filter(models.Book.available_copies == 0)
    return query.order_by(models.Book.title, models.Book.id)


def list_books(db: Session, filters: BookFilters) -> List[models.Book]:
    return book_query(db, filters).all()


def loan_query(db: Session, filters: LoanFilters):
    query = (db.query(models.Loan)
             .join(models.Book, models.Loan.book_id == models.Book.id)
             .join(models.Borrower, models.Loan.borrower_id == models.Borrower.id)
             .options(contains_eager(models.Loan.book), contains_eager(models.Loan.borrower)))
    if filters.active_only:
        query = query.filter(models.Loan.return_date.is_(None))
    if filters.title:
        query = query.filter(_contains(models.Book.title, filters.title))
    if filters.borrower:
        query = query.filter(or_(_contains(models.Borrower.first_name, filters.borrower),
                                 _contains(models.Borrower.last_name, filters.borrower)))
    return query.order_by(models.Loan.loan_date.desc(), models.Loan.id.desc())


def list_loans(db: Session, filters: LoanFilters) -> List[models.Loan]:
    return loan_query(db, filters).all()


def borrower_query(db: Session, filters: BorrowerFilters):
    query = db.query(models.Borrower)
    if filters.name:
        query = query.filter(or_(_contains(models.Borrower.last_name, filters.name),
                                 _contains(models.Borrower.first_name, filters.name)))
    if filters.school_class:
        query = query.filter(models.Borrower.school_class == filters.school_class)
    return query.order_by(models.Borrower.last_name, models.Borrower.first_name)


def list_borrowers(db: Session, filters: BorrowerFilters) -> List[models.Borrower]:
    return borrower_query(db, filters).all()


def _distinct_values(db: Session, column) -> List[str]:
    rows = (db.query(column).distinct()
            .filter(column.isnot(None), column != "")
            .order_by(column).all())
    return [r[0] for r in rows]


def distinct_categories(db: Session) -> List[str]:
    return _distinct_values(db, models.Book.category)


def distinct_publishers(db: Session) -> List[str]:
    return _distinct_values(db, models.Book.publisher)
