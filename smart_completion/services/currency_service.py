"""
续写引擎 汇率换算服务 (Currency Service)

职责：
- "1美元" -> "（7.1776 人民币）"
- "100欧元换算成英镑" -> 指定目标货币

默认目标：人民币换成美元，其他货币都换成人民币。结果保留 4 位小数。
"""

from smart_completion.core.models import CompletionResult, ResultType
from smart_completion.services.numbers import to_fixed

NUMBER = r"([0-9]+(?:\.[0-9]+)?)"
CURRENCIES = r"(美元|人民币|欧元|英镑|USD|CNY|EUR|GBP)"

CURRENCY_PATTERN = rf"{NUMBER}\s*{CURRENCIES}"
CONVERT_PATTERN = rf"{NUMBER}\s*{CURRENCIES}\s*(?:等于|换算成|转换为)\s*(?:多少)?\s*{CURRENCIES}?"

HOME_CURRENCY = "CNY"


def default_target(source: str) -> str:
    return "USD" if source == HOME_CURRENCY else HOME_CURRENCY


def convert(amount: float, source: str, target: str, fixtures):
    if source == target:
        return None
    rate = fixtures.exchange_rate(source, target)
    if rate is None:
        return None
    converted = to_fixed(amount * rate, 4)
    return CompletionResult(ResultType.CURRENCY, f"（{converted} {fixtures.currency_names[target]}）")


def handle_currency(match, text, fixtures):
    """[处理器] 汇率换算，货币写中文名或代码都可以。"""
    groups = match.groups()
    amount, currency = groups[0], groups[1]
    target_name = groups[2] if len(groups) > 2 else None

    source = fixtures.currency_code(currency)
    if source is None:
        return None
    target = fixtures.currency_code(target_name) if target_name else default_target(source)
    if target is None:
        return None
    return convert(float(amount), source, target, fixtures)
