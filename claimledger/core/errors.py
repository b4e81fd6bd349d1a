"""
Claim Ledger Errors

Every failure an operation can report. Each error carries a ``kind`` that
the entry points surface to callers.
"""


class ClaimLedgerError(Exception):
    """Base class for all claim ledger failures."""
    kind = "ClaimLedgerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentCount(ClaimLedgerError):
    """Wrong number of arguments for an operation."""
    kind = "InvalidArgumentCount"

    def __init__(self, operation: str, expected: int, received: int):
        super().__init__(
            f"Incorrect number of arguments for {operation}. "
            f"Expecting {expected}, received {received}."
        )
        self.operation = operation
        self.expected = expected
        self.received = received


class DecodeError(ClaimLedgerError):
    """Stored bytes do not parse into the expected entity."""
    kind = "DecodeError"

    def __init__(self, key: str, reason: str = ""):
        message = f"Failed to decode record at '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.key = key


class PersistenceError(ClaimLedgerError):
    """A store read or write failed underneath an engine operation."""
    kind = "PersistenceError"


class NotFoundOrStoreError(ClaimLedgerError):
    """A raw key read failed, either because the key is absent or the store is down."""
    kind = "NotFoundOrStoreError"

    def __init__(self, key: str, message: str = ""):
        super().__init__(message or f"Failed to get value of {key}")
        self.key = key


class RecordNotFound(NotFoundOrStoreError):
    """The key has never been written."""
    kind = "RecordNotFound"

    def __init__(self, key: str):
        super().__init__(key, f"No record stored under '{key}'")


class StoreUnavailable(NotFoundOrStoreError):
    """The store could not serve the request."""
    kind = "StoreUnavailable"

    def __init__(self, key: str, reason: str = ""):
        message = f"Store unavailable for '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(key, message)


class VerificationFailed(ClaimLedgerError):
    """A verification check did not match the stored claim."""
    kind = "VerificationFailed"


class IdentityMismatch(VerificationFailed):
    kind = "IdentityMismatch"

    def __init__(self):
        super().__init__("User Identity authentication failed")


class VehicleMismatch(VerificationFailed):
    kind = "VehicleMismatch"

    def __init__(self):
        super().__init__("Vehicle verification failed")


class ClaimDetailsMismatch(VerificationFailed):
    kind = "ClaimDetailsMismatch"

    def __init__(self):
        super().__init__("Claim details verification failed")


class IllegalTransition(ClaimLedgerError):
    """Stage advancement requested out of order."""
    kind = "IllegalTransition"


class UnknownOperation(ClaimLedgerError):
    """Dispatch received a name with no matching handler."""
    kind = "UnknownOperation"

    def __init__(self, function: str):
        super().__init__(f"Received unknown function: {function}")
        self.function = function
