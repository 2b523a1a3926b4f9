"""数字显示格式化工具"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# 足够容纳任意有限 float 的全部整数位
_WIDE = Context(prec=400)


def format_number(value: float) -> str:
    """
    [工具] 按"原生精度"显示数字
    取最短往返的有效数字，小数点位置落在 (-6, 21] 内用定点写法，
    否则用科学计数法 (1e-7, 1e+21)；整数值不带小数部分。
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(float(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    # 小数点在第 n 位有效数字之后
    n = k + exponent

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        mantissa = digits[0] if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return "-" + body if sign else body


def to_fixed(value: float, digits: int) -> str:
    """
    [工具] 保留固定位小数
    按浮点数的精确二进制值舍入，恰好在中间时远离零进位。
    """
    if math.isnan(value) or math.isinf(value):
        return format_number(value)
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_WIDE))
