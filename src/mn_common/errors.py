"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Request validation
  2xxx: Credits / Account
  3xxx: Drafts
  6xxx: Text generation
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Request validation ---

class RequestValidationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1001, f"Invalid request: {detail}", 422)


# --- 2xxx: Credits / Account ---

class InsufficientCreditsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            2001,
            f"Insufficient credits: required {required}, available {available}. "
            "Purchase more credits to continue.",
            402,
        )


class AccountNotFoundError(AppError):
    def __init__(self, account_id: str) -> None:
        super().__init__(2002, f"Account not found: {account_id}", 404)


class UnknownCreditPackageError(AppError):
    def __init__(self, package_id: str) -> None:
        super().__init__(2003, f"Unknown credit package: {package_id}", 422)


class InvalidCreditAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(2004, f"Credit amount must be positive, got {amount}", 422)


# --- 3xxx: Drafts ---

class DraftNotFoundError(AppError):
    def __init__(self, draft_id: int) -> None:
        super().__init__(3001, f"Draft not found: {draft_id}", 404)


# --- 6xxx: Text generation ---

class GenerationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, f"Text generation failed: {detail}", 502)


class GenerationUnavailableError(AppError):
    def __init__(self) -> None:
        super().__init__(6002, "Text generation is not configured", 503)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
