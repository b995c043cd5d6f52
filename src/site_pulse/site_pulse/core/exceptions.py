class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingParameterError(ValidationError):
    """Raised when a required request parameter (date, startDate, endDate) is absent."""

    def __init__(self, name: str):
        super().__init__(f"{name} parameter is required")
        self.name = name


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a looked-up entity does not exist."""


class UnattributableRecordError(DomainError):
    """Raised when a record carries no usable employee identifier."""

    def __init__(self, kind: str, record_id):
        super().__init__(f"{kind} record {record_id} has no employee identifier")
        self.kind = kind
        self.record_id = record_id


class DataSourceUnavailableError(DomainError):
    """Raised when one of the record stores cannot be read.

    The whole request fails; partial attendance data is never returned.
    """

    def __init__(self, source: str):
        super().__init__(f"Unable to read {source}")
        self.source = source
