from enum import Enum
from typing import Any


class SqlType(str, Enum):
    """Every MySQL column type the uploader can emit."""
    TINYINT_UNSIGNED = "TINYINT UNSIGNED"
    INT = "INT"
    DECIMAL = "DECIMAL(10,2)"
    MONEY = "DECIMAL(15,2)"
    BOOLEAN = "BOOLEAN"
    VARCHAR_20 = "VARCHAR(20)"
    VARCHAR_50 = "VARCHAR(50)"
    VARCHAR_100 = "VARCHAR(100)"
    VARCHAR_255 = "VARCHAR(255)"
    VARCHAR_500 = "VARCHAR(500)"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    TEXT = "TEXT"
    JSON = "JSON"

    def __str__(self) -> str:
        return self.value


class TypeInferrer:
    SMALL_INT_MAX = 255
    SHORT_TEXT_MAX = 50

    @classmethod
    def infer(cls, value: Any, column_name: str = "") -> SqlType:
        if value is None:
            return SqlType.TEXT

        # bool is a subclass of int
        if isinstance(value, bool):
            return SqlType.BOOLEAN

        if isinstance(value, float) and value.is_integer():
            value = int(value)

        if isinstance(value, int):
            if 0 <= value <= cls.SMALL_INT_MAX:
                return SqlType.TINYINT_UNSIGNED
            return SqlType.INT

        if isinstance(value, float):
            return SqlType.DECIMAL

        if isinstance(value, str):
            if len(value) <= cls.SHORT_TEXT_MAX:
                return SqlType.VARCHAR_255
            return SqlType.TEXT

        if isinstance(value, (list, dict)):
            return SqlType.JSON

        return SqlType.TEXT
