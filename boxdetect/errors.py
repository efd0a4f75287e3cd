"""Exceptions raised by the detection managers."""


class SkelError(Exception):
    """Base class for all errors raised by this package."""


class AlreadyInitializedError(SkelError):
    """Raised when a manager is initialised a second time."""


class NotInitializedError(SkelError):
    """Raised when a manager is used before it has been initialised."""


class IllegalParamError(SkelError):
    """Raised when an argument or a deployment setting is not acceptable."""