from school_library.cli import DEMO_ADMIN_HASH, add_librarian
from school_library.core.security import hash_password, verify_password
from school_library.services.auth import authenticate


def test_demo_digest_matches_demo_password():
    assert hash_password("admin123") == DEMO_ADMIN_HASH
    assert verify_password("admin123", DEMO_ADMIN_HASH)
    assert not verify_password("admin124", DEMO_ADMIN_HASH)
    assert not verify_password("admin123", None)


def test_authenticate_returns_identity(db):
    librarian = authenticate(db, "admin", "admin123")
    assert librarian is not None
    assert librarian.id == 1
    assert librarian.name == "Max Mustermann"


def test_authenticate_rejects_wrong_password_and_unknown_login_alike(db):
    assert authenticate(db, "admin", "wrong") is None
    assert authenticate(db, "nobody", "admin123") is None
    assert authenticate(db, "", "") is None


def test_added_librarian_can_log_in(db):
    add_librarian(db, "jdoe", "geheim", "Jane", "Doe", "jane.doe@school.at")
    librarian = authenticate(db, "jdoe", "geheim")
    assert librarian.name == "Jane Doe"
