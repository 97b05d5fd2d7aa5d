import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

CURRENCY_PREFIX = "$"
MONEY_TOLERANCE = Decimal("0.01")


def parse_money(text: str) -> Decimal:
    """
    从 'Item total: $39.98' 提取 Decimal('39.98')
    """
    match = re.search(r"\$([\d.]+)", text or "")
    if not match:
        raise ValueError(f"无法从文本中解析金额：{text!r}")
    return Decimal(match.group(1))


def parse_price(text: str) -> Decimal:
    """'$29.99' -> Decimal('29.99')，只剥离固定的货币前缀"""
    value = (text or "").strip()
    if not value.startswith(CURRENCY_PREFIX):
        raise ValueError(f"价格缺少货币前缀：{text!r}")
    try:
        return Decimal(value[len(CURRENCY_PREFIX):])
    except InvalidOperation:
        raise ValueError(f"价格格式错误：{text!r}") from None


def within_tolerance(actual, expected, tolerance: Decimal = MONEY_TOLERANCE) -> bool:
    return abs(Decimal(str(actual)) - Decimal(str(expected))) <= tolerance


def sanitize(name: str) -> str:
    """文件名安全化：非字母数字一律替换为下划线"""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def file_timestamp(now: datetime = None) -> str:
    """2024-01-31_12-30-05 形式的时间戳"""
    now = now or datetime.now()
    return now.strftime("%Y-%m-%d_%H-%M-%S")
