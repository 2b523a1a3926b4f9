"""
续写引擎 单位换算服务 (Unit Service)

职责：
- 温度：摄氏度 <-> 华氏度，保留 1 位小数
- 长度：米/厘米/千米/英尺/英寸/英里 两两互换，保留 2 位小数

特点：
- 长度统一折算成米再换成目标单位，表里声明的单位都能换
- 没写目标单位时按公制 <-> 英制的默认方向换算
"""

from smart_completion.core.models import CompletionResult, ResultType
from smart_completion.services.numbers import to_fixed

NUMBER = r"([0-9]+(?:\.[0-9]+)?)"
CONNECTOR = r"(?:等于|转换为|换算成)"

TEMPERATURE_UNITS = r"(摄氏度|华氏度|℃|℉)"
LENGTH_UNITS = r"(米|厘米|千米|英尺|英寸|英里|m|cm|km|ft|in|mi)"

TEMPERATURE_PATTERN = rf"{NUMBER}\s*{TEMPERATURE_UNITS}\s*(?:{CONNECTOR}\s*(?:多少)?\s*{TEMPERATURE_UNITS}?)?"
LENGTH_PATTERN = rf"{NUMBER}\s*{LENGTH_UNITS}\s*(?:{CONNECTOR}\s*(?:多少)?\s*{LENGTH_UNITS}?)?"

CELSIUS = "摄氏度"
FAHRENHEIT = "华氏度"
TEMPERATURE_ALIASES = {"摄氏度": CELSIUS, "℃": CELSIUS, "华氏度": FAHRENHEIT, "℉": FAHRENHEIT}


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


def convert_temperature(value, unit, target=None):
    source = TEMPERATURE_ALIASES[unit]
    target = TEMPERATURE_ALIASES[target] if target else (FAHRENHEIT if source == CELSIUS else CELSIUS)
    if target == source:
        return None
    if source == CELSIUS:
        converted = celsius_to_fahrenheit(value)
    else:
        converted = fahrenheit_to_celsius(value)
    return CompletionResult(ResultType.CONVERSION, f"{to_fixed(converted, 1)}{target}")


def convert_length(value, unit, fixtures, target=None):
    source_name, source_meters = fixtures.length_units[unit]
    if target:
        target_name, target_meters = fixtures.length_units[target]
    else:
        target_name = fixtures.default_length_targets[source_name]
        _, target_meters = fixtures.length_units[target_name]
    if target_name == source_name:
        return None
    factor = fixtures.direct_length_factors.get((source_name, target_name))
    if factor is not None:
        converted = value * factor
    else:
        converted = value * source_meters / target_meters
    return CompletionResult(ResultType.CONVERSION, f"{to_fixed(converted, 2)}{target_name}")


def handle_unit(match, text, fixtures):
    """[处理器] 单位换算，温度和长度两种写法共用。"""
    amount, unit, target = match.groups()
    value = float(amount)
    if unit in TEMPERATURE_ALIASES:
        return convert_temperature(value, unit, target)
    return convert_length(value, unit, fixtures, target)
