from enum import Enum
from typing import Any, Optional

__all__ = (
    "DtoError",
    "ImproperConfigurationError",
    "MappingError",
    "MappingErrorCode",
    "MissingDependencyError",
    "ValidationError",
)


class DtoError(Exception):
    """Base exception class from which all sqldto exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``DtoError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(DtoError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqldto[{install_package or package}]' to install sqldto with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(DtoError):
    """Improper Configuration error.

    Raised when a connection cannot be bootstrapped from the given settings.
    """


class MappingErrorCode(Enum):
    """Reasons a record type or record could not be mapped."""

    MISSING_IDENTITY = "missing_identity"
    NULL_IDENTITY = "null_identity"
    UNSUPPORTED_IDENTITY_TYPE = "unsupported_identity_type"
    AMBIGUOUS_IDENTITY = "ambiguous_identity"
    MISSING_FIELD = "missing_field"
    DUPLICATE_COLUMN = "duplicate_column"
    NOT_A_RECORD_TYPE = "not_a_record_type"

    def __str__(self) -> str:
        return self.value


class MappingError(DtoError):
    """A record type violates the mapping contract.

    Raised while building metadata, rendering SQL or moving values between a
    record and a row.
    """

    code: MappingErrorCode

    def __init__(self, message: str, code: MappingErrorCode) -> None:
        super().__init__(detail=f"[{code}] {message}")
        self.code = code


class ValidationError(DtoError):
    """Caller supplied malformed input, such as a heterogeneous bulk insert."""
