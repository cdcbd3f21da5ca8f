import pytest

from conftest import book_by_title, borrower_by_last_name
from school_library.core.errors import NotFound, BorrowerHasOpenLoans, BookHasLoans, PreconditionFailed
from school_library.models import models
from school_library.schemas.schemas import BookForm, BorrowerForm
from school_library.services import loans, records


def test_new_book_starts_fully_available(db):
    book = records.create_book(db, BookForm(isbn="1", title="Neu", total_copies="4"))
    assert book.total_copies == 4
    assert book.available_copies == 4


def test_new_book_with_unparseable_total_has_no_copies(db):
    book = records.create_book(db, BookForm(isbn="1", title="Neu", total_copies="viele"))
    assert (book.total_copies, book.available_copies) == (0, 0)


def test_new_book_with_oversized_total_has_no_copies(db):
    book = records.create_book(db, BookForm(isbn="1", title="Big", total_copies="99999999999999999999"))
    assert (book.total_copies, book.available_copies) == (0, 0)


def test_count_keeps_leading_integer(db):
    book = records.create_book(db, BookForm(isbn="1", title="Neu", total_copies="2.5"))
    assert (book.total_copies, book.available_copies) == (2, 2)
    book = records.create_book(db, BookForm(isbn="2", title="Neu", total_copies="x" + "9" * 5000))
    assert book.total_copies == 0
    book = records.create_book(db, BookForm(isbn="3", title="Neu", total_copies="9" * 5000))
    assert book.total_copies == 0


def test_blank_optional_fields_are_stored_as_null(db):
    book = records.create_book(db, BookForm(isbn="1", title="Neu", description="  ", author="",
                                            publisher="", category="", price="", total_copies="1"))
    assert book.description is None
    assert book.author is None
    assert book.publisher is None
    assert book.category is None
    assert book.price is None


def test_price_is_parsed(db):
    book = records.create_book(db, BookForm(isbn="1", title="Neu", price="12,50", total_copies="1"))
    assert book.price == 12.5
    book = records.create_book(db, BookForm(isbn="2", title="Neu", price="gratis", total_copies="1"))
    assert book.price is None


@pytest.mark.parametrize("total, available, expected", [
    ("5", "3", (5, 3)),
    ("3", "7", (3, 3)),
    ("-2", "1", (0, 0)),
    ("abc", "", (0, 0)),
    ("4", "-1", (4, 0)),
    ("4", "x", (4, 0)),
    ("1e3", "2.5", (1, 1)),
    ("10 Stück", "3", (10, 3)),
    ("99999999999999999999", "1", (0, 0)),
])
def test_update_clamps_copy_counts(db, total, available, expected):
    book = book_by_title(db, "Exel")
    form = BookForm(isbn=book.isbn, title="Exel", total_copies=total, available_copies=available)
    book = records.update_book(db, book.id, form)
    assert (book.total_copies, book.available_copies) == expected


def test_update_overwrites_all_fields(db):
    book = book_by_title(db, "Exel")
    form = BookForm(isbn="999", title="Excel", description="", author="Someone",
                    publisher="", category="IT", price="", total_copies="4", available_copies="4")
    book = records.update_book(db, book.id, form)
    assert book.isbn == "999"
    assert book.title == "Excel"
    assert book.description is None
    assert book.author == "Someone"
    assert book.publisher is None
    assert book.category == "IT"
    assert book.price is None


def test_lookup_missing_book_is_not_found(db):
    with pytest.raises(NotFound):
        records.get_book(db, 999)
    with pytest.raises(NotFound):
        records.update_book(db, 999, BookForm(isbn="1", title="x"))


def test_delete_book_without_loans(db):
    book = book_by_title(db, "Exel")
    records.delete_book(db, book.id)
    assert db.query(models.Book).filter(models.Book.title == "Exel").count() == 0


def test_delete_missing_book_is_a_no_op(db):
    records.delete_book(db, 999)
    assert db.query(models.Book).count() == 3


def test_delete_book_with_loan_history_is_refused(db):
    book = book_by_title(db, "Exel")
    loan = loans.issue_loan(db, book.id, borrower_by_last_name(db, "Berger").id, 1)
    loans.return_loan(db, loan.id)

    with pytest.raises(BookHasLoans):
        records.delete_book(db, book.id)
    assert db.query(models.Book).filter(models.Book.id == book.id).count() == 1


def test_create_borrower(db):
    borrower = records.create_borrower(db, BorrowerForm(first_name=" Anna ", last_name="Huber",
                                                        school_class="", email=""))
    assert borrower.first_name == "Anna"
    assert borrower.school_class is None
    assert borrower.email is None
    assert records.get_borrower(db, borrower.id).last_name == "Huber"


def test_get_missing_borrower_is_not_found(db):
    with pytest.raises(NotFound):
        records.get_borrower(db, 999)


def test_delete_borrower_with_open_loan_is_refused_without_writes(db):
    borrower = borrower_by_last_name(db, "Berger")
    loans.issue_loan(db, book_by_title(db, "Exel").id, borrower.id, 1)

    with pytest.raises(BorrowerHasOpenLoans) as excinfo:
        records.delete_borrower(db, borrower.id)
    assert isinstance(excinfo.value, PreconditionFailed)
    assert db.query(models.Borrower).filter(models.Borrower.id == borrower.id).count() == 1
    assert db.query(models.Loan).filter(models.Loan.borrower_id == borrower.id).count() == 1


def test_delete_borrower_without_open_loans(db):
    borrower = borrower_by_last_name(db, "Berger")
    loan = loans.issue_loan(db, book_by_title(db, "Exel").id, borrower.id, 1)
    loans.return_loan(db, loan.id)

    records.delete_borrower(db, borrower.id)
    assert db.query(models.Borrower).filter(models.Borrower.id == borrower.id).count() == 0
    assert db.query(models.Loan).count() == 0


def test_delete_borrower_with_no_loans(db):
    borrower = borrower_by_last_name(db, "Schlichting")
    records.delete_borrower(db, borrower.id)
    assert db.query(models.Borrower).count() == 1
