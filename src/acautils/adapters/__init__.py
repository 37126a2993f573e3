"""Adapter toggling and the stored adapter list."""

from acautils.adapters.store import AdapterStore, StoreError
from acautils.adapters.toggle import (
    REASON_NON_BINARY,
    REASON_NOT_FOUND,
    PropertiesFile,
    PropertyLine,
    ToggleError,
    properties_path,
    toggle,
    validate_env_name,
)

__all__ = [
    "REASON_NON_BINARY",
    "REASON_NOT_FOUND",
    "AdapterStore",
    "PropertiesFile",
    "PropertyLine",
    "StoreError",
    "ToggleError",
    "properties_path",
    "toggle",
    "validate_env_name",
]
