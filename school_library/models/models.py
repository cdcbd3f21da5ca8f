from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from school_library.core.database import Base

class Borrower(Base):
    __tablename__ = "borrower"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, index=True)
    school_class = Column(String, nullable=True, index=True)
    email = Column(String, nullable=True)
    loans = relationship("Loan", back_populates="borrower")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

class Librarian(Base):
    __tablename__ = "librarian"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    login_name = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    loans = relationship("Loan", back_populates="librarian")

class Book(Base):
    __tablename__ = "book"
    __table_args__ = (
        CheckConstraint("available_copies >= 0 AND available_copies <= total_copies",
                        name="ck_book_available_copies"),
    )
    id = Column(Integer, primary_key=True, index=True)
    isbn = Column(String, nullable=False)
    title = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    author = Column(String, nullable=True)
    publisher = Column(String, nullable=True, index=True)
    category = Column(String, nullable=True, index=True)
    price = Column(Float, nullable=True)
    total_copies = Column(Integer, nullable=False, default=0)
    available_copies = Column(Integer, nullable=False, default=0)
    loans = relationship("Loan", back_populates="book")

Index('ix_book_title_author', Book.title, Book.author)

class Loan(Base):
    __tablename__ = "loan"
    id = Column(Integer, primary_key=True, index=True)
    book_id = Column(Integer, ForeignKey("book.id"), nullable=False, index=True)
    borrower_id = Column(Integer, ForeignKey("borrower.id"), nullable=False, index=True)
    librarian_id = Column(Integer, ForeignKey("librarian.id"), nullable=False)
    loan_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=True, index=True)
    book = relationship("Book", back_populates="loans")
    borrower = relationship("Borrower", back_populates="loans")
    librarian = relationship("Librarian", back_populates="loans")

    @property
    def is_outstanding(self):
        return self.return_date is None
