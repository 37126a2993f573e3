"""aca-utils: IP/port extraction and adapter toggling for repositories."""

__version__ = "0.3.0"
