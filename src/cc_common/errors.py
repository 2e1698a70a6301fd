"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Authentication / authorization
  2xxx: Cash card
  9xxx: System / request validation

401, 403 and 404 are rendered with an empty body (see src/main.py), so a
foreign card and a missing card produce byte-identical responses.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.headers = headers or {}
        super().__init__(message)


# --- 1xxx: Auth ---

class UnauthenticatedError(AppError):
    def __init__(self, realm: str) -> None:
        super().__init__(
            1001,
            "Full authentication is required to access this resource",
            401,
            headers={"WWW-Authenticate": f'Basic realm="{realm}"'},
        )


class ForbiddenError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Access denied", 403)


# --- 2xxx: Cash card ---

class CashCardNotFoundError(AppError):
    def __init__(self, card_id: int) -> None:
        super().__init__(2001, f"Cash card not found: {card_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class InvalidSortError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Invalid sort parameter: {detail}", 400)


REQUEST_VALIDATION_ERROR_CODE = 9004
