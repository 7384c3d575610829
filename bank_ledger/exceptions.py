"""Custom exception hierarchy for bank-ledger."""


class LedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class ValidationError(LedgerError):
    """Raised when an entity field is malformed or out of range."""


class InvalidAmountError(ValidationError):
    """Raised when a deposit amount is not positive."""


class DuplicateEntityError(LedgerError):
    """Raised when a uniqueness rule would be violated."""


class DuplicateBankError(DuplicateEntityError):
    """Raised when a bank name is already taken."""


class DuplicateClientError(DuplicateEntityError):
    """Raised when a client tax id is already registered."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class UnregisteredEntityError(EntityNotFoundError):
    """Raised when an account references a bank or client unknown to the registry."""


class ConstraintViolationError(LedgerError):
    """Raised when a cross-entity or balance constraint is violated."""


class AccountLimitExceededError(ConstraintViolationError):
    """Raised when a client already holds the maximum number of accounts at a bank."""


class DuplicateDepositAccountError(ConstraintViolationError):
    """Raised when a client already holds a deposit account at a bank."""


class BelowMinimumBalanceError(ConstraintViolationError):
    """Raised when a deposit would open below its minimum balance."""


class InvalidCreditLimitError(ConstraintViolationError):
    """Raised when a credit limit is not positive."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""
