from .UnauthorizedError import UnauthorizedError
from .ValidationError import ValidationError
from .NotFoundError import NotFoundError
from .StorageError import StorageError

__all__ = ['UnauthorizedError', 'ValidationError', 'NotFoundError', 'StorageError']
