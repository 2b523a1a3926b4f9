"""
续写引擎 静态数据 (Fixture Data Store)

职责：
- 城市名 -> IANA 时区
- 公式/常识名称 -> 公式文本
- 货币汇率 (有向表) 与货币中文名
- 长度单位换算系数 (以米为基准)

特点：
- **Read Only**: 引擎初始化时构建一次，之后只读 (MappingProxyType)
- **No Live Feed**: 汇率是模拟数据，不联网刷新
"""

from types import MappingProxyType

TIMEZONES = {
    "纽约": "America/New_York",
    "洛杉矶": "America/Los_Angeles",
    "伦敦": "Europe/London",
    "巴黎": "Europe/Paris",
    "东京": "Asia/Tokyo",
    "首尔": "Asia/Seoul",
    "新加坡": "Asia/Singapore",
    "迪拜": "Asia/Dubai",
    "北京": "Asia/Shanghai",
    "悉尼": "Australia/Sydney",
}

# 英文别名，查询时统一转小写
TIMEZONE_ALIASES = {
    "newyork": "America/New_York",
    "losangeles": "America/Los_Angeles",
    "london": "Europe/London",
    "paris": "Europe/Paris",
    "tokyo": "Asia/Tokyo",
    "seoul": "Asia/Seoul",
    "singapore": "Asia/Singapore",
    "dubai": "Asia/Dubai",
    "beijing": "Asia/Shanghai",
    "sydney": "Australia/Sydney",
}

FORMULAS = {
    "牛顿第一定律": "物体保持静止或匀速直线运动状态",
    "牛顿第二定律": "F = ma",
    "牛顿第三定律": "作用力与反作用力大小相等，方向相反",
    "欧姆定律": "V = IR",
    "万有引力定律": "F = G(m₁m₂)/r²",
    "勾股定理": "a² + b² = c²",
    "二次方程": "x = (-b ± √(b²-4ac)) / 2a",
    "圆的面积公式": "S = πr²",
    "水的分子式": "H₂O",
    "二氧化碳": "CO₂",
    "氧气的化学式": "O₂",
}

# 汇率 (模拟实时数据)，有向：EXCHANGE_RATES[源][目标]
EXCHANGE_RATES = {
    "USD": {"CNY": 7.1776, "EUR": 0.8234, "GBP": 0.7456},
    "CNY": {"USD": 0.1393, "EUR": 0.1147, "GBP": 0.1039},
    "EUR": {"USD": 1.2143, "CNY": 8.7234, "GBP": 0.9054},
    "GBP": {"USD": 1.3416, "CNY": 9.6321, "EUR": 1.1045},
}

CURRENCY_NAMES = {
    "USD": "美元",
    "CNY": "人民币",
    "EUR": "欧元",
    "GBP": "英镑",
}

# 长度单位 -> (标准中文名, 折合多少米)
LENGTH_UNITS = {
    "米": ("米", 1.0),
    "m": ("米", 1.0),
    "厘米": ("厘米", 0.01),
    "cm": ("厘米", 0.01),
    "千米": ("千米", 1000.0),
    "km": ("千米", 1000.0),
    "英尺": ("英尺", 0.3048),
    "ft": ("英尺", 0.3048),
    "英寸": ("英寸", 0.0254),
    "in": ("英寸", 0.0254),
    "英里": ("英里", 1609.344),
    "mi": ("英里", 1609.344),
}

# 常用换算的直接系数，优先于按米折算
DIRECT_LENGTH_FACTORS = {
    ("米", "英尺"): 3.28084,
    ("米", "英寸"): 39.3701,
    ("英尺", "米"): 0.3048,
    ("厘米", "英寸"): 0.393701,
}

# 未指定目标单位时的默认换算方向 (公制 <-> 英制)
DEFAULT_LENGTH_TARGETS = {
    "米": "英尺",
    "厘米": "英寸",
    "千米": "英里",
    "英尺": "米",
    "英寸": "厘米",
    "英里": "千米",
}


class FixtureStore:
    """[数据] 只读的静态数据集合，引擎初始化时构建一次。"""

    def __init__(self):
        self.timezones = MappingProxyType(dict(TIMEZONES))
        self.timezone_aliases = MappingProxyType(dict(TIMEZONE_ALIASES))
        self.formulas = MappingProxyType(dict(FORMULAS))
        self.exchange_rates = MappingProxyType(
            {src: MappingProxyType(dict(targets)) for src, targets in EXCHANGE_RATES.items()}
        )
        self.currency_names = MappingProxyType(dict(CURRENCY_NAMES))
        self.currency_codes = MappingProxyType({name: code for code, name in CURRENCY_NAMES.items()})
        self.length_units = MappingProxyType(dict(LENGTH_UNITS))
        self.default_length_targets = MappingProxyType(dict(DEFAULT_LENGTH_TARGETS))
        self.direct_length_factors = MappingProxyType(dict(DIRECT_LENGTH_FACTORS))

    def find_timezone(self, city: str):
        """按中文名或英文别名 (不区分大小写) 查找时区，找不到返回 None。"""
        return self.timezones.get(city) or self.timezone_aliases.get(city.lower())

    def currency_code(self, name_or_code: str):
        """中文名或代码 -> ISO 代码；不认识返回 None。"""
        if name_or_code in self.currency_codes:
            return self.currency_codes[name_or_code]
        code = name_or_code.upper()
        return code if code in self.currency_names else None

    def exchange_rate(self, source: str, target: str):
        """
        查汇率：直接汇率 -> 反向汇率取倒数 -> 经人民币中转。
        都查不到时返回 None。
        """
        direct = self.exchange_rates.get(source, {}).get(target)
        if direct is not None:
            return direct
        reverse = self.exchange_rates.get(target, {}).get(source)
        if reverse:
            return 1 / reverse
        if "CNY" not in (source, target):
            to_cny = self.exchange_rate(source, "CNY")
            from_cny = self.exchange_rate("CNY", target)
            if to_cny is not None and from_cny is not None:
                return to_cny * from_cny
        return None
