import os

os.environ.setdefault("LIBRARY_DB", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from school_library.cli import seed
from school_library.core.database import Base, get_db, make_engine
from school_library.main import app
from school_library.models import models

ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'library_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed(session)
    yield session
    session.close()


@pytest.fixture
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    r = client.post("/login", data={"bename": ADMIN_LOGIN, "passwort": ADMIN_PASSWORD},
                    follow_redirects=False)
    assert r.status_code == 303
    return client


def book_by_title(db, title):
    return db.query(models.Book).filter(models.Book.title == title).one()


def borrower_by_last_name(db, last_name):
    return db.query(models.Borrower).filter(models.Borrower.last_name == last_name).one()
