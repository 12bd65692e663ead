"""
===================================
Errors raised by fragment builders.
===================================

All errors derive from SqlFragmentError (itself a ValueError) so callers can
catch every malformed-argument problem with a single except clause. Errors are
raised synchronously and abort only the builder call that raised them.

Classes:
    SqlFragmentError: Base class for all builder errors
    ConditionCountMismatch: JOIN condition list does not match right tables
    ColumnCountMismatch: INSERT source has fewer fields than requested columns
    UnnamedArgumentError: SET argument without a column name
    DuplicateColumnError: SET argument naming a column twice
    MultiValuedArgumentError: SET argument with several values (strict mode)
    SqlFormatError: Pretty-printer rejected the SQL or its options
    MultiValuedArgumentWarning: Non-fatal diagnostic for multi-valued SET args
"""


class SqlFragmentError(ValueError):
    """Base exception for all fragment builder errors."""
    pass


class ConditionCountMismatch(SqlFragmentError):
    """Raised when a per-table JOIN condition list has the wrong length.
    
    The list must hold exactly one condition set per right-hand table.
    """
    pass


class ColumnCountMismatch(SqlFragmentError):
    """Raised when INSERT values have fewer fields than requested columns."""
    pass


class UnnamedArgumentError(SqlFragmentError):
    """Raised when a SET argument does not carry a column name."""
    pass


class DuplicateColumnError(SqlFragmentError):
    """Raised when a SET clause names the same column more than once."""
    pass


class MultiValuedArgumentError(SqlFragmentError):
    """Raised in strict mode when a SET argument holds more than one value."""
    pass


class SqlFormatError(SqlFragmentError):
    """Raised when the external pretty-printer cannot format the input."""
    pass


class MultiValuedArgumentWarning(UserWarning):
    """Warning emitted when only the first value of a SET argument is used."""
    pass
