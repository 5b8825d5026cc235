class StorageError(Exception):
    """Raised when the underlying database operation fails."""
    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause
