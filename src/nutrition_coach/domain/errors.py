"""Domain errors mapped onto API failures."""


class DomainError(Exception):
    """Base class for expected, user-visible failures."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Input the user can correct."""

    status_code = 400


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    status_code = 404


class ServiceUnavailableError(DomainError):
    """An external collaborator is disabled or unreachable."""

    status_code = 503
