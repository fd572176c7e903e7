from __future__ import annotations

from enum import Enum, IntEnum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NETWORK_FAILURE = "network_failure"
    FIELD_NOT_FOUND = "field_not_found"
    NOT_INSTALLED_LOCALLY = "not_installed_locally"
    VERSION_VARIES_BY_DEVICE = "version_varies_by_device"
    UNKNOWN = "unknown"


class ErrorCode(IntEnum):
    """Which public operation produced a failure."""

    URL = 100
    VERIFIED_URL = 101
    VERSION = 102
    UPDATE = 103
    DOWNLOADS = 104
    PUBLISHED_DATE = 105
    OS_REQUIREMENTS = 106
    CONTENT_RATING = 107
    APP_RATING = 108
    APP_RATING_COUNT = 109
    CHANGELOG = 110
    PAGE_INFO = 111


class MagnetoError(RuntimeError):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        code: ErrorCode | None = None,
        package_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.package_id = package_id
        self.status_code = status_code

    def with_code(self, code: ErrorCode) -> MagnetoError:
        """Return a copy tagged with ``code``, keeping the original cause."""

        if self.code is code:
            return self
        err = MagnetoError(
            self.kind,
            self.message,
            code=code,
            package_id=self.package_id,
            status_code=self.status_code,
        )
        err.__cause__ = self.__cause__
        return err

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"MagnetoError(kind={self.kind.name}, code={self.code!r}, "
            f"package_id={self.package_id!r}, message={self.message!r})"
        )
