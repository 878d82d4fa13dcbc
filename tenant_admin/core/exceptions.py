from typing import Optional


class MigrationError(Exception):
    """Raised when a backfill run fails; carries the underlying cause."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class AccountError(Exception):
    """Raised when an identity-provider account operation fails."""

    def __init__(self, message: str, user_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
