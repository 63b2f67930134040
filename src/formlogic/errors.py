"""
Exception types for the form logic package.

Evaluation itself never raises: unknown operators, unknown actions and
type-mismatched comparisons degrade to default decisions. These exceptions
are only used at the loading boundary, where raw records and raw answer
values are turned into model objects.
"""


class FormLogicError(Exception):
    """Base class for all errors raised by formlogic."""
    pass


class ConfigurationError(FormLogicError):
    """Raised when a form configuration record cannot be loaded."""
    pass


class AnswerTypeError(FormLogicError):
    """Raised when a raw answer value has no tagged representation."""
    pass


__all__ = ["FormLogicError", "ConfigurationError", "AnswerTypeError"]
