"""Schema setup and seeding for the school library database.

    python -m school_library.cli --initdb --seed
    python -m school_library.cli --add-librarian jdoe --password secret \
        --first-name Jane --last-name Doe --email jane.doe@school.at
"""
import argparse
import logging

from school_library.core.config import configure_logging
from school_library.core.database import Base, SessionLocal, engine
from school_library.core.security import hash_password
from school_library.models.models import Book, Borrower, Librarian

logger = logging.getLogger("school_library.cli")

# sha256 of the demo password "admin123"
DEMO_ADMIN_HASH = "240be518fabd2724ddb6f04eeb1da5967448d7e831c08c8fa822809f74c720a9"


def reset_schema(bind=engine):
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    logger.info("Recreated tables: %s", ", ".join(Base.metadata.tables))


def seed(db):
    db.add_all([
        Borrower(first_name='Phillipp', last_name='Schlichting', school_class='4ITM',
                 email='phillipp.schlichting@school.at'),
        Borrower(first_name='Paul', last_name='Berger', school_class='3ITM',
                 email='paul.berger@school.at'),
        Librarian(first_name='Max', last_name='Mustermann', email='max.mustermann@school.at',
                  login_name='admin', password_hash=DEMO_ADMIN_HASH),
        Book(isbn='978-3-12345-000-1', title='Elektrotechnik - Grundlagen + E-Book',
             description='Grundlagen der Elektrotechnik für HTL-Schüler:innen.',
             author='Verlag Jugend & Volk GmbH', publisher='Verlag Jugend & Volk GmbH',
             category='Bildung', price=20.00, total_copies=2, available_copies=2),
        Book(isbn='978-3-12345-000-2', title='Exel',
             description='Einführung in das wundevolle EXEL.',
             author='Bill Gates', publisher='Microsoft',
             category='Informationstechnologie', price=49.99, total_copies=4, available_copies=4),
        Book(isbn='978-3-12345-000-3', title='Mann & Kuh',
             description='Eine Herzzerreisende Geschichte über einen Mann und einer Kuh.',
             author='Julian Bittner', publisher='Fantasy World',
             category='Wissenschaft', price=30.00, total_copies=1, available_copies=1),
    ])
    db.commit()
    logger.info('Seeded sample data')


def add_librarian(db, login_name, password, first_name, last_name, email):
    librarian = Librarian(first_name=first_name, last_name=last_name, email=email,
                          login_name=login_name, password_hash=hash_password(password))
    db.add(librarian)
    db.commit()
    logger.info(f"Created librarian id={librarian.id} login={login_name}")
    return librarian


def main(argv=None):
    parser = argparse.ArgumentParser(description='School library database utilities')
    parser.add_argument('--initdb', action='store_true', help='Drop and recreate all tables')
    parser.add_argument('--seed', action='store_true', help='Insert the demo rows')
    parser.add_argument('--add-librarian', metavar='LOGIN', help='Create a librarian account')
    parser.add_argument('--password', help='Password for --add-librarian')
    parser.add_argument('--first-name', default='')
    parser.add_argument('--last-name', default='')
    parser.add_argument('--email', default='')
    args = parser.parse_args(argv)
    if args.add_librarian and not args.password:
        parser.error('--add-librarian requires --password')

    configure_logging()
    if args.initdb:
        reset_schema()
    else:
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if args.seed:
            seed(db)
        if args.add_librarian:
            add_librarian(db, args.add_librarian, args.password,
                          args.first_name, args.last_name, args.email)
    finally:
        db.close()


if __name__ == '__main__':
    main()
