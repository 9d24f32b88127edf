"""
Error types raised while building, encoding, decoding and signing
transactions.
"""

from typing import Any, Final, Optional


class VeChainException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class FieldValidationError(VeChainException, ValueError):
    """
    Thrown when a field value is malformed, out of range or of the wrong
    length.
    """

    path: Final[Optional[str]]
    """
    Location of the offending field, e.g. `transaction.clauses[0].to`.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{message} in `{path}`"
        super().__init__(message)
        self.path = path


class InvalidClauseError(FieldValidationError):
    """
    Thrown when a clause breaks a clause invariant, for example a contract
    creation without bytecode.
    """


class DecodingError(VeChainException):
    """
    Thrown when encoded bytes do not have the structure a profile expects.
    """

    path: Final[Optional[str]]

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{message} in `{path}`"
        super().__init__(message)
        self.path = path


class TransactionTypeError(DecodingError):
    """
    Unknown combination of type prefix and field count.
    """

    transaction_type: Final[Optional[int]]
    """
    The type byte of the transaction that caused the error, if any.
    """

    field_count: Final[Optional[int]]

    def __init__(
        self,
        message: str,
        transaction_type: Optional[int] = None,
        field_count: Optional[int] = None,
    ):
        super().__init__(message)
        self.transaction_type = transaction_type
        self.field_count = field_count


class InvalidSignatureError(VeChainException):
    """
    Thrown when a signature has the wrong length or a signer cannot be
    recovered from it.
    """


class FeeDelegationError(VeChainException):
    """
    Thrown when a transaction cannot be co-signed by a fee delegator.
    """


class UnsignedTransactionError(VeChainException):
    """
    Thrown when an operation needs a signed transaction.
    """


class NodeError(VeChainException):
    """
    Thrown when a Thor node request fails or returns something unexpected.
    """

    status_code: Final[Optional[int]]

    def __init__(self, message: str, status_code: Optional[int] = None):
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
        self.status_code = status_code


class TransactionRevertedError(VeChainException):
    """
    Thrown when an included transaction was reverted.
    """

    receipt: Final[Any]
    """
    The `vechain.responses.Receipt` of the transaction.
    """

    def __init__(self, receipt: Any):
        super().__init__(f"transaction reverted: {receipt.revert_reason}")
        self.receipt = receipt
