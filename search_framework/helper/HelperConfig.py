"""Settings and logger shared by every component of an indexing run."""

import os
from typing import Any

from search_framework.logging.logging_setup import ColorLogger, get_null_logger

_TRUE_VALUES = ("true", "1", "yes", "on")


class HelperConfig:
    """Typed access to the environment variables that configure the pipeline.

    Keys are case-insensitive. An unset or empty variable falls back to the
    default; without a default it is an error, which is how components mark
    a setting as required.
    """

    def __init__(self, logger: ColorLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_null_logger()

    def _read(self, key: str, default: Any) -> tuple[str, str | None]:
        """Returns the normalized key and the raw value, None if the default applies.

        Raises:
            ValueError: If the variable is unset and there is no default.
        """
        key = key.upper()
        raw = (os.getenv(key) or "").strip() or None
        if raw is None and default is None:
            raise ValueError(f"Setting '{key}' is required but not set.")
        return key, raw

    def get_string_val(self, key: str, default: str | None = None) -> str:
        _, raw = self._read(key, default)
        return raw if raw is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Reads an int, or a float if the value contains a decimal point.

        Raises:
            ValueError: If the setting is missing or not numeric.
        """
        key, raw = self._read(key, default)
        if raw is None:
            return default
        try:
            return float(raw) if "." in raw else int(raw)
        except ValueError:
            raise ValueError(f"Setting '{key}' must be numeric, got '{raw}'.") from None

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        _, raw = self._read(key, default)
        if raw is None:
            return default
        return raw.lower() in _TRUE_VALUES

    def get_list_val(self, key: str, default: list | None = None, separator: str = ",", element_type: type = str) -> list:
        """Reads a bracketed list such as "[articles,pages]".

        Blank elements are dropped, the rest is cast to element_type.

        Raises:
            ValueError: If the setting is missing, lacks the brackets or an element cannot be cast.
        """
        key, raw = self._read(key, default)
        if raw is None:
            return default
        if not (raw.startswith("[") and raw.endswith("]")):
            raise ValueError(f"Setting '{key}' must look like '[a{separator}b]', got '{raw}'.")

        elements = [elem.strip() for elem in raw[1:-1].split(separator)]
        try:
            return [element_type(elem) for elem in elements if elem]
        except ValueError as e:
            raise ValueError(f"Setting '{key}' has an element that is not a {element_type.__name__}: {e}") from None

    def get_typed_val(self, key: str, val_type: str = "string", default: Any = None) -> Any:
        """Reads a setting by the type name used in EnvConfig descriptors.

        Raises:
            ValueError: If the type name is unknown or the value is invalid.
        """
        readers = {
            "string": self.get_string_val,
            "number": self.get_number_val,
            "bool": self.get_bool_val,
            "list": self.get_list_val,
        }
        if val_type not in readers:
            raise ValueError(f"Unsupported type '{val_type}' for setting '{key.upper()}'.")
        return readers[val_type](key, default=default)

    def get_logger(self) -> ColorLogger:
        return self._logger
