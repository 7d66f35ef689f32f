from typing import Any, Optional

from .config_exceptions import ConfigurationError


class FactoryError(ConfigurationError):
    """
    Base exception for hardware factory errors.
    Carries optional context for better logs without string parsing.
    """
    def __init__(
        self,
        message: str,
        *,
        hardware_type: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.hardware_type = hardware_type
        self.config = config
        self.__cause__ = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.hardware_type:
            return f"{base} (hardware_type={self.hardware_type})"
        return base


class UnknownHardwareTypeError(FactoryError):
    def __init__(self, unknown_type: str, known_types: list[str]) -> None:
        msg = f"Unknown hardware type '{unknown_type}'. Known types: {', '.join(sorted(known_types)) or '∅'}"
        super().__init__(msg, hardware_type=unknown_type)


class InvalidHardwareConfigError(FactoryError):
    def __init__(
        self,
        message: str,
        *,
        hardware_type: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, hardware_type=hardware_type, cause=cause)
