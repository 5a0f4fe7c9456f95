__all__ = [
    'C45Error', 'InvalidArgumentError', 'InvalidInputError', 'InvalidStateError', 'NotFittedError'
]


class C45Error(Exception):
    """Base class for all errors raised by the tree learner."""
    pass


class InvalidArgumentError(C45Error, ValueError):
    """Raised when a helper receives an argument outside its domain (e.g. empty labels)."""
    pass


class InvalidInputError(C45Error, ValueError):
    """Raised when the training data is malformed."""
    pass


class InvalidStateError(C45Error, RuntimeError):
    """Raised when an internal precondition does not hold."""
    pass


class NotFittedError(C45Error):
    """Raised if the estimator is used before fitting."""
    pass
