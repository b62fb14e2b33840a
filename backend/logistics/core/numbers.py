"""数值工具 - 金额/重量/体积统一按 Decimal 处理"""

import enum
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """转 Decimal；None、""、无法解析的字符串都按 0 处理"""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    try:
        return Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return ZERO


def to_int(value: Any) -> int:
    """转整数数量；None、"" 按 0 处理"""
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(to_decimal(value))
    except (InvalidOperation, ValueError):
        return 0


def format_value(value: Any) -> str:
    """写入历史记录用的字符串形式"""
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        # 去掉末尾多余的 0，50.000 -> 50
        normalized = value.normalize()
        return format(normalized, "f")
    return str(value)
