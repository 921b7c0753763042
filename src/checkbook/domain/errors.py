"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class EmptyFileError(ValidationError):
    """CSV file has no header plus data rows, or no row could be parsed."""

    def __init__(self, message: str = "No valid transactions found in the file."):
        super().__init__(message)


class UnrecognizedFormatError(ValidationError):
    """CSV header matches no registered format profile."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"CSV header does not match known bank formats: {header}")


class MalformedRowError(ValidationError):
    """A CSV data row cannot be mapped to a transaction."""


class StoreOperationError(DomainError):
    """A record store call failed while applying an import plan."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name already in use."""
    return f"Account with name '{name}' already exists"
