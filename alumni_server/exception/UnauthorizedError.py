class UnauthorizedError(Exception):
    """Raised when authentication fails due to invalid, expired, or malformed token.

    ``status`` is 401 for missing credentials and 403 for a token that was
    presented but could not be accepted.
    """
    def __init__(self, message, status=401):
        super().__init__(message)
        self.status = status
