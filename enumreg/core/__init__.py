from .registry import UNKNOWN, Enum, EnumType, logger, make_enum

__all__ = ["Enum", "EnumType", "UNKNOWN", "logger", "make_enum"]
