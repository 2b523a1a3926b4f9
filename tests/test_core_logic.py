"""
智能续写 核心逻辑单元测试 (Unit Tests)

职责：
- 验证 CompletionEngine 的规则分发：先声明的规则先尝试，first-match-wins
- 验证缓存：确定性规则只算一次，时间相关规则每次现算
- 验证容错：处理器抛异常只记日志，解析继续

特点：
- **Stub Rules**: 用 MagicMock 处理器构造歧义输入，精确控制命中顺序
- **Fixed Clock**: 日期/时区用固定时钟，结果可断言
"""

import sys
import os
import re
import datetime
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

# [环境配置] 确保可以导入 smart_completion 包
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from smart_completion.core.engine import CompletionEngine
from smart_completion.core.models import Category, CompletionResult, ResultType, Rule
from smart_completion.core.normalizer import normalize
from smart_completion.core.rules import validate_rules

NO_CONFIG = "/nonexistent/config.ini"
FIXED_NOW = datetime.datetime(2024, 7, 1, 12, 0, tzinfo=datetime.timezone.utc)


def stub_rule(category, priority, handler, pattern=r".*", cacheable=True):
    return Rule(
        category=category,
        priority=priority,
        patterns=(re.compile(pattern),),
        handler=handler,
        cacheable=cacheable,
    )


class TestNormalizer(unittest.TestCase):
    def test_strip_and_collapse(self):
        self.assertEqual(normalize("  1 +   1  "), "1 + 1")

    def test_remove_chinese_punctuation(self):
        self.assertEqual(normalize("牛顿第二定律？"), "牛顿第二定律")
        self.assertEqual(normalize("37摄氏度，等于：。！；"), "37摄氏度等于")

    def test_punctuation_does_not_leave_trailing_space(self):
        self.assertEqual(normalize("1+1 。"), "1+1")

    def test_empty_input(self):
        self.assertEqual(normalize("   "), "")


class TestDefaultRules(unittest.IsolatedAsyncioTestCase):
    """[测试场景] 默认规则表下的端到端输出"""

    def setUp(self):
        self.engine = CompletionEngine(config_path=NO_CONFIG, clock=lambda: FIXED_NOW)

    async def test_arithmetic(self):
        result = await self.engine.process("1+1")
        self.assertEqual(result, CompletionResult(ResultType.CALCULATION, "= 2"))
        self.assertEqual(self.engine.format_output(result), "= 2")

    async def test_division_by_zero(self):
        for text in ("5/0", "5除0"):
            result = await self.engine.process(text)
            self.assertEqual(result.result, "除数不能为0")

    async def test_relative_date(self):
        result = await self.engine.process("3天后")
        self.assertEqual(result, CompletionResult(ResultType.DATE, "（7月4日）"))

    async def test_timezone(self):
        result = await self.engine.process("纽约时间")
        self.assertEqual(result, CompletionResult(ResultType.TIMEZONE, "（08:00）"))

    async def test_temperature(self):
        result = await self.engine.process("37摄氏度")
        self.assertEqual(result.result, "98.6华氏度")
        result = await self.engine.process("37摄氏度等于")
        self.assertEqual(result.result, "98.6华氏度")

    async def test_currency(self):
        result = await self.engine.process("1美元")
        self.assertEqual(result, CompletionResult(ResultType.CURRENCY, "（7.1776 人民币）"))

    async def test_formula(self):
        result = await self.engine.process("牛顿第二定律")
        self.assertEqual(result, CompletionResult(ResultType.FORMULA, "F = ma"))

    async def test_unsupported_input(self):
        result = await self.engine.process("hello world 123")
        self.assertIsNone(result)
        self.assertEqual(self.engine.format_output(result), "")

    async def test_unknown_city_is_unsupported(self):
        self.assertIsNone(await self.engine.process("火星时间"))

    async def test_idempotent_for_deterministic_rules(self):
        for text in ("1+1", "37摄氏度", "1美元", "牛顿第二定律"):
            first = await self.engine.process(text)
            second = await self.engine.process(text)
            self.assertEqual(first, second)

    async def test_time_dependent_rules_bypass_cache(self):
        """
        [测试场景] 日期/时区规则不进缓存
        预期：时钟前进一天后，"明天" 的结果随之变化
        """
        now = [FIXED_NOW]
        engine = CompletionEngine(config_path=NO_CONFIG, clock=lambda: now[0])

        first = await engine.process("明天")
        now[0] = FIXED_NOW + datetime.timedelta(days=1)
        second = await engine.process("明天")

        self.assertEqual(first.result, "（7月2日）")
        self.assertEqual(second.result, "（7月3日）")
        self.assertEqual(engine.cache_size, 0)


class TestDispatch(unittest.IsolatedAsyncioTestCase):
    """[测试场景] 用桩规则验证分发顺序、缓存与容错"""

    async def test_earlier_rule_wins(self):
        first = MagicMock(return_value=CompletionResult(ResultType.FORMULA, "first"))
        second = MagicMock(return_value=CompletionResult(ResultType.FORMULA, "second"))
        engine = CompletionEngine(
            config_path=NO_CONFIG,
            rules=[stub_rule(Category.MATH, 1, first), stub_rule(Category.FORMULA, 2, second)],
        )

        result = await engine.process("ambiguous")

        self.assertEqual(result.result, "first")
        second.assert_not_called()

    async def test_none_falls_through_to_next_rule(self):
        first = MagicMock(return_value=None)
        second = MagicMock(return_value=CompletionResult(ResultType.FORMULA, "second"))
        engine = CompletionEngine(
            config_path=NO_CONFIG,
            rules=[stub_rule(Category.MATH, 1, first), stub_rule(Category.FORMULA, 2, second)],
        )

        result = await engine.process("ambiguous")

        self.assertEqual(result.result, "second")
        first.assert_called_once()

    async def test_patterns_tried_in_declared_order(self):
        seen = []

        def handler(match, text):
            seen.append(match.re.pattern)
            return None if match.re.pattern == "a.*" else CompletionResult(ResultType.FORMULA, "ok")

        rule = Rule(
            category=Category.FORMULA,
            priority=1,
            patterns=(re.compile("a.*"), re.compile(".*c"), re.compile("abc")),
            handler=handler,
        )
        engine = CompletionEngine(config_path=NO_CONFIG, rules=[rule])

        await engine.process("abc")

        self.assertEqual(seen, ["a.*", ".*c"])

    async def test_whole_string_match(self):
        handler = MagicMock(return_value=CompletionResult(ResultType.FORMULA, "x"))
        engine = CompletionEngine(config_path=NO_CONFIG, rules=[stub_rule(Category.FORMULA, 1, handler, "abc")])

        self.assertIsNone(await engine.process("xabcx"))
        handler.assert_not_called()

    async def test_cache_skips_handler(self):
        handler = MagicMock(return_value=CompletionResult(ResultType.CALCULATION, "= 2"))
        engine = CompletionEngine(config_path=NO_CONFIG, rules=[stub_rule(Category.MATH, 1, handler)])

        await engine.process("1+1")
        await engine.process("  1+1 ")

        handler.assert_called_once()
        self.assertEqual(engine.cache_size, 1)

        engine.clear_cache()
        await engine.process("1+1")
        self.assertEqual(handler.call_count, 2)

    async def test_non_cacheable_rule_recomputes(self):
        handler = MagicMock(return_value=CompletionResult(ResultType.DATE, "（7月2日）"))
        engine = CompletionEngine(
            config_path=NO_CONFIG,
            rules=[stub_rule(Category.DATE, 1, handler, cacheable=False)],
        )

        await engine.process("明天")
        await engine.process("明天")

        self.assertEqual(handler.call_count, 2)

    async def test_cache_disabled_by_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.ini"
            config_path.write_text("[engine]\ncache_enabled = false\n", encoding="utf-8")
            handler = MagicMock(return_value=CompletionResult(ResultType.CALCULATION, "= 2"))
            engine = CompletionEngine(config_path=config_path, rules=[stub_rule(Category.MATH, 1, handler)])

            await engine.process("1+1")
            await engine.process("1+1")

        self.assertEqual(handler.call_count, 2)

    async def test_cache_hit_is_logged_at_debug(self):
        handler = MagicMock(return_value=CompletionResult(ResultType.CALCULATION, "= 2"))
        engine = CompletionEngine(config_path=NO_CONFIG, rules=[stub_rule(Category.MATH, 1, handler)])
        await engine.process("1+1")

        with self.assertLogs("smart_completion.core.engine", level="DEBUG") as logs:
            await engine.process("1+1")

        self.assertTrue(any("缓存命中" in line for line in logs.output))

    async def test_malformed_config_falls_back_to_defaults(self):
        """
        [测试场景] 配置文件缺少 section 头
        预期：
        1. 记录一条警告，不抛异常
        2. 所有配置项使用默认值
        """
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.ini"
            config_path.write_text("cache_enabled = false\n", encoding="utf-8")
            with self.assertLogs("smart_completion.core.engine", level="WARNING") as logs:
                engine = CompletionEngine(config_path=config_path, clock=lambda: FIXED_NOW)

        self.assertIn("config.ini", logs.output[0])
        self.assertTrue(engine.cache_enabled)
        self.assertEqual(engine.home_timezone, "Asia/Shanghai")
        self.assertEqual(engine.format_output(await engine.process("8点纽约时间")), "（北京时间 20:00）")

    def test_invalid_cache_flag_keeps_cache_on(self):
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.ini"
            config_path.write_text("[engine]\ncache_enabled = maybe\n", encoding="utf-8")
            with self.assertLogs("smart_completion.core.engine", level="WARNING"):
                engine = CompletionEngine(config_path=config_path)

        self.assertTrue(engine.cache_enabled)

    def test_unknown_home_timezone_rejected(self):
        """
        [测试场景] home_timezone 写错
        预期：初始化时抛 ValueError，而不是在查询时静默失败
        """
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.ini"
            config_path.write_text("[engine]\nhome_timezone = Mars/Base\n", encoding="utf-8")
            with self.assertRaises(ValueError) as ctx:
                CompletionEngine(config_path=config_path)

        self.assertIn("Mars/Base", str(ctx.exception))

    async def test_handler_fault_is_logged_and_skipped(self):
        """
        [测试场景] 处理器抛异常
        预期：
        1. 异常被记录到日志
        2. 后续规则继续尝试并返回结果
        """
        broken = MagicMock(side_effect=RuntimeError("boom"))
        fallback = MagicMock(return_value=CompletionResult(ResultType.FORMULA, "ok"))
        engine = CompletionEngine(
            config_path=NO_CONFIG,
            rules=[stub_rule(Category.MATH, 1, broken), stub_rule(Category.FORMULA, 2, fallback)],
        )

        with self.assertLogs("smart_completion.core.engine", level="ERROR") as logs:
            result = await engine.process("anything")

        self.assertEqual(result.result, "ok")
        self.assertIn("math", logs.output[0])

    async def test_handler_fault_without_fallback_returns_none(self):
        broken = MagicMock(side_effect=ValueError("bad capture"))
        engine = CompletionEngine(config_path=NO_CONFIG, rules=[stub_rule(Category.MATH, 1, broken)])

        with self.assertLogs("smart_completion.core.engine", level="ERROR"):
            self.assertIsNone(await engine.process("anything"))

    async def test_async_handler_is_awaited(self):
        async def handler(match, text):
            return CompletionResult(ResultType.FORMULA, f"async:{text}")

        engine = CompletionEngine(config_path=NO_CONFIG, rules=[stub_rule(Category.FORMULA, 1, handler)])

        result = await engine.process("abc")

        self.assertEqual(result.result, "async:abc")


class TestRuleTable(unittest.TestCase):
    def test_out_of_order_priorities_rejected(self):
        handler = MagicMock(return_value=None)
        rules = [stub_rule(Category.MATH, 2, handler), stub_rule(Category.DATE, 1, handler)]
        with self.assertRaises(ValueError):
            validate_rules(rules)
        with self.assertRaises(ValueError):
            CompletionEngine(config_path=NO_CONFIG, rules=rules)

    def test_default_rule_order(self):
        engine = CompletionEngine(config_path=NO_CONFIG)
        self.assertEqual(
            [rule.category for rule in engine.rules],
            [Category.MATH, Category.DATE, Category.TIMEZONE, Category.UNIT, Category.CURRENCY, Category.FORMULA],
        )
        cacheable = {rule.category: rule.cacheable for rule in engine.rules}
        self.assertFalse(cacheable[Category.DATE])
        self.assertFalse(cacheable[Category.TIMEZONE])
        self.assertTrue(cacheable[Category.MATH])

    def test_format_output_empty_result(self):
        self.assertEqual(CompletionEngine.format_output(None), "")
        self.assertEqual(CompletionEngine.format_output(CompletionResult(ResultType.ERROR, "")), "")


if __name__ == '__main__':
    unittest.main()
