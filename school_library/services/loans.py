"""Loan lifecycle: issuing a book to a borrower and taking it back.

A loan is OUTSTANDING while its return date is empty and RETURNED once the
date is set; there is no way back. Issuing and returning each touch two
tables (loan and book), so both writes happen inside one session
transaction and are rolled back together on any failure.
"""
import logging
from datetime import date

from sqlalchemy import case
from sqlalchemy.orm import Session

from school_library.core.errors import NotFound, NoCopiesAvailable
from school_library.models import models

logger = logging.getLogger("school_library.loans")


def issue_loan(db: Session, book_id: int, borrower_id: int, librarian_id: int) -> models.Loan:
    try:
        book = db.query(models.Book).filter(models.Book.id == book_id).first()
        if not book:
            raise NotFound("Buch nicht gefunden.")
        borrower = db.query(models.Borrower).filter(models.Borrower.id == borrower_id).first()
        if not borrower:
            raise NotFound("Benutzer nicht gefunden.")
        # check and decrement in one statement so the last copy is never handed out twice
        taken = (db.query(models.Book)
                 .filter(models.Book.id == book_id, models.Book.available_copies > 0)
                 .update({models.Book.available_copies: models.Book.available_copies - 1},
                         synchronize_session=False))
        if taken == 0:
            raise NoCopiesAvailable()
        loan = models.Loan(book_id=book_id, borrower_id=borrower_id, librarian_id=librarian_id,
                           loan_date=date.today(), return_date=None)
        db.add(loan)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(loan)
    logger.info(f"Borrower {borrower_id} borrowed book {book_id} loan {loan.id} (librarian {librarian_id})")
    return loan


def return_loan(db: Session, loan_id: int) -> models.Loan:
    try:
        loan = db.query(models.Loan).filter(models.Loan.id == loan_id).first()
        if not loan:
            raise NotFound("Ausleihe nicht gefunden.")
        if loan.return_date is not None:
            logger.info(f"Loan {loan_id} already returned on {loan.return_date}")
            return loan
        closed = (db.query(models.Loan)
                  .filter(models.Loan.id == loan_id, models.Loan.return_date.is_(None))
                  .update({models.Loan.return_date: date.today()}, synchronize_session=False))
        if closed == 1:
            (db.query(models.Book)
             .filter(models.Book.id == loan.book_id)
             .update({models.Book.available_copies: case(
                 (models.Book.available_copies < models.Book.total_copies,
                  models.Book.available_copies + 1),
                 else_=models.Book.available_copies)},
                 synchronize_session=False))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(loan)
    logger.info(f"Loan {loan_id} returned")
    return loan
