"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``school_library.main`` maps them to responses.
Store faults are not wrapped: any ``SQLAlchemyError`` reaching the
application is answered with a generic database error page.
"""


class LibraryError(Exception):
    message = "Unbekannter Fehler."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFound(LibraryError):
    message = "Eintrag nicht gefunden."


class PreconditionFailed(LibraryError):
    message = "Aktion nicht möglich."


class NoCopiesAvailable(PreconditionFailed):
    message = "Keine Exemplare verfügbar."


class BorrowerHasOpenLoans(PreconditionFailed):
    message = "Benutzer kann nicht gelöscht werden: es sind noch Ausleihen offen."


class BookHasLoans(PreconditionFailed):
    message = "Buch kann nicht gelöscht werden: es gibt Ausleihen zu diesem Buch."


class LoginRequired(Exception):
    """Raised by the auth gate when no librarian is logged in."""
