class NotFoundError(Exception):
    """Raised when a referenced user, post, gallery item or reaction does not exist."""
    def __init__(self, message):
        super().__init__(message)
