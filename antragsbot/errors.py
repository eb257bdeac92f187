"""
Error Taxonomy

Every error raised by the motion workflow carries a message that can be shown
to the invoking user as-is.
"""


class AntragsbotError(Exception):
    """Base class for all motion workflow errors."""

    user_message = "Es ist ein Fehler aufgetreten."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)
        self.message = message or self.user_message


class IdentityNotFoundError(AntragsbotError):
    """Raised when the invoking Discord user is not registered."""

    user_message = "Du bist nicht registriert. Nutze /registrieren."


class MalformedThreadError(AntragsbotError):
    """
    Raised when a command is used outside a thread, or when the thread
    transcript has fewer messages than its slot layout requires.
    """

    user_message = "Dieser Befehl kann nur in einem Antrags-Thread genutzt werden."


class MissingRecordMappingError(AntragsbotError):
    """Raised when an edited thread has no record in the Correlation Store."""

    user_message = "Zu diesem Thread ist kein Antrag gespeichert."


class CorrelationStoreError(AntragsbotError):
    """Raised when the local Correlation Store rejects a write."""

    pass


class ExternalCallError(AntragsbotError):
    """Raised when a call to an external surface fails. Never retried."""

    pass


class ChatPlatformError(ExternalCallError):
    """Raised when a Discord API call fails."""

    pass


class RecordServiceError(ExternalCallError):
    """Raised when a Record Service request fails."""

    pass
