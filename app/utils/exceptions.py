"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the session lifecycle
error taxonomy. Services and the token codec raise these directly, so each
failure surfaces at the boundary with its own status code.

Usage:
    from app.utils.exceptions import InvalidTokenError, TokenReuseError
    raise InvalidTokenError()
    raise TokenReuseError()

All 401 errors share the UnauthorizedError base and carry an ``X-Auth-Error``
header so clients can tell "renew" apart from "sign in again".
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a login identifier matches no user account.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when registering a username or email that already exists.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. blank registration fields).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 기본 예외 — 인증 실패 시 사용.

    401 Unauthorized base exception.
    Subclasses set ``code``, which is echoed in the ``X-Auth-Error`` header.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    code: str = "unauthorized"
    default_detail: str = "Authentication required"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail or self.default_detail,
            headers={"WWW-Authenticate": "Bearer", "X-Auth-Error": self.code},
        )


class BadCredentialError(UnauthorizedError):
    """잘못된 비밀번호 — Wrong secret supplied at login (user-correctable)."""

    code = "bad_credential"
    default_detail = "Invalid user credentials"


class UnauthenticatedError(UnauthorizedError):
    """토큰 미제공 — No token was presented with the request."""

    code = "unauthenticated"
    default_detail = "Unauthorized request"


class InvalidTokenError(UnauthorizedError):
    """서명/구조 오류 — Signature, structure or kind check failed."""

    code = "invalid_token"
    default_detail = "Invalid token"


class TokenExpiredError(UnauthorizedError):
    """만료된 토큰 — Token is past its encoded expiry.

    Kept distinct from InvalidTokenError: an expired access token can be
    renewed, an expired refresh token requires a new login.
    """

    code = "token_expired"
    default_detail = "Token has expired"


class TokenReuseError(UnauthorizedError):
    """재사용/폐기된 리프레시 토큰 — Valid signature but superseded or logged out.

    Clients must send the user back to login instead of retrying.
    """

    code = "token_reused"
    default_detail = "Refresh token is expired or used"


class UpstreamUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 저장소 장애 시 사용.

    503 Service Unavailable exception.
    Raised when the credential store times out or cannot be reached.
    Retryable by the caller with backoff; never retried by the server.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Credential store unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": "1"},
        )
