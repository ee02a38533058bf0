from __future__ import annotations

from typing import Optional


class ProvisionerError(RuntimeError):
    pass


class ArityError(ProvisionerError):
    """Raised when the number of positional arguments is outside the supported range."""

    def __init__(self, *, kind: str, count: int, minimum: int, maximum: int) -> None:
        self.kind = kind
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Invalid argument count for {kind}: got {count}, expected between {minimum} and {maximum}"
        )


class ConfigurationError(ProvisionerError):
    """A supplied field value failed validation or parsing."""

    def __init__(self, *, field: str, value: str, reason: Optional[str] = None) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Invalid value for {field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class GrantFormatError(ProvisionerError):
    def __init__(self, *, grant: str, reason: str) -> None:
        self.grant = grant
        self.reason = reason
        super().__init__(f"Malformed ACL {grant!r}: {reason}")


class ProvisioningError(ProvisionerError):
    pass
