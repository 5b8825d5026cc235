class ValidationError(Exception):
    """Raised when a request payload is missing required data or is malformed.

    ``errors`` optionally maps field names to messages.
    """
    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}
