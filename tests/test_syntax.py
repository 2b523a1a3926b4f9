"""
智能续写 基础语法测试 (Syntax Test)

职责：
- 系统的冒烟测试 (Smoke Test)
- 验证核心模块是否可以被 Python 解释器正常加载

特点：
- **Fast Fail**: 作为 CI 流水线的第一道关卡
- **Zero Config**: 不依赖任何外部环境或 Mock 对象
"""

import sys
import os
import unittest

# [环境配置] 确保可以导入 smart_completion 包
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestSyntax(unittest.TestCase):
    def test_import_engine(self):
        """
        [测试场景] 导入 CompletionEngine
        预期：无异常抛出
        """
        try:
            from smart_completion.core.engine import CompletionEngine  # noqa: F401
        except Exception as e:
            self.fail(f"❌ 导入失败: {e}")

    def test_import_services(self):
        """
        [测试场景] 导入全部处理器服务
        预期：无异常抛出
        """
        try:
            from smart_completion.services import (  # noqa: F401
                currency_service,
                date_service,
                formula_service,
                math_service,
                timezone_service,
                unit_service,
            )
        except Exception as e:
            self.fail(f"❌ 导入失败: {e}")

    def test_import_cli(self):
        """
        [测试场景] 导入命令行入口
        预期：无异常抛出
        """
        try:
            from smart_completion.main import app  # noqa: F401
        except Exception as e:
            self.fail(f"❌ 导入失败: {e}")


if __name__ == '__main__':
    unittest.main()
