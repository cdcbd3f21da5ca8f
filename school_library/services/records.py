import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from school_library.core.errors import NotFound, BorrowerHasOpenLoans, BookHasLoans
from school_library.models import models
from school_library.schemas.schemas import BookForm, BorrowerForm

logger = logging.getLogger("school_library.records")


# -----------------------------
# Books
# -----------------------------
def get_book(db: Session, book_id: int) -> models.Book:
    book = db.query(models.Book).filter(models.Book.id == book_id).first()
    if not book:
        raise NotFound("Buch nicht gefunden.")
    return book


def create_book(db: Session, form: BookForm) -> models.Book:
    # a new book starts fully available
    book = models.Book(
        isbn=form.isbn,
        title=form.title,
        description=form.description,
        author=form.author,
        publisher=form.publisher,
        category=form.category,
        price=form.price,
        total_copies=form.total_copies,
        available_copies=form.total_copies,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info(f"Created book id={book.id} title={book.title}")
    return book


def update_book(db: Session, book_id: int, form: BookForm) -> models.Book:
    book = get_book(db, book_id)
    total = form.total_copies
    available = form.available_copies or 0
    if available > total:
        logger.debug(f"Clamped available_copies for book id={book_id} from {available} to {total}")
        available = total
    book.isbn = form.isbn
    book.title = form.title
    book.description = form.description
    book.author = form.author
    book.publisher = form.publisher
    book.category = form.category
    book.price = form.price
    book.total_copies = total
    book.available_copies = available
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info(f"Updated book id={book.id}")
    return book


def delete_book(db: Session, book_id: int) -> None:
    book = db.query(models.Book).filter(models.Book.id == book_id).first()
    if not book:
        return
    loan_count = db.query(func.count(models.Loan.id)).filter(models.Loan.book_id == book_id).scalar()
    if loan_count > 0:
        raise BookHasLoans()
    db.delete(book)
    db.commit()
    logger.info(f"Deleted book id={book_id}")


# -----------------------------
# Borrowers
# -----------------------------
def get_borrower(db: Session, borrower_id: int) -> models.Borrower:
    borrower = db.query(models.Borrower).filter(models.Borrower.id == borrower_id).first()
    if not borrower:
        raise NotFound("Benutzer nicht gefunden.")
    return borrower


def create_borrower(db: Session, form: BorrowerForm) -> models.Borrower:
    borrower = models.Borrower(
        first_name=form.first_name,
        last_name=form.last_name,
        school_class=form.school_class,
        email=form.email,
    )
    db.add(borrower)
    db.commit()
    db.refresh(borrower)
    logger.info(f"Created borrower id={borrower.id}")
    return borrower


def count_open_loans(db: Session, borrower_id: int) -> int:
    return (db.query(func.count(models.Loan.id))
            .filter(models.Loan.borrower_id == borrower_id,
                    models.Loan.return_date.is_(None))
            .scalar())


def delete_borrower(db: Session, borrower_id: int) -> None:
    borrower = db.query(models.Borrower).filter(models.Borrower.id == borrower_id).first()
    if not borrower:
        return
    if count_open_loans(db, borrower_id) > 0:
        raise BorrowerHasOpenLoans()
    # closed loans go with the borrower
    db.query(models.Loan).filter(models.Loan.borrower_id == borrower_id).delete(synchronize_session=False)
    db.delete(borrower)
    db.commit()
    logger.info(f"Deleted borrower id={borrower_id}")
