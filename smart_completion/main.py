"""
智能续写 命令行入口

命令：
- complete TEXT : 续写一句话并输出
- examples      : 查看支持的示例
- shell         : 进入交互模式
"""

import typer

from smart_completion.cli import cli
from smart_completion.logging_config import setup_logging

app = typer.Typer(help="中文智能续写：识别输入意图，自动补全计算结果。")


def _configure_logging(debug: bool):
    level = cli.engine.config.get("logging", "level", fallback="WARNING")
    setup_logging(level, debug=debug)


@app.command()
def complete(text: str = typer.Argument(..., help="要续写的文本，例如 1+1"),
             debug: bool = typer.Option(False, "--debug", help="开启调试模式，显示详细日志")):
    """
    续写一句话，输出 "原文 + 续写结果"。
    无法识别时退出码为 1。
    """
    _configure_logging(debug)
    full_text, _ = cli.complete(text)
    if full_text is None:
        cli.console.print(f"[red]❌ {cli.get_random_ui('unsupported')}[/red]")
        raise typer.Exit(code=1)
    cli.console.print(full_text, markup=False, highlight=False)


@app.command()
def examples():
    """查看支持的示例输入。"""
    cli.show_examples()


@app.command()
def shell(debug: bool = typer.Option(False, "--debug", help="开启调试模式，显示详细日志")):
    """进入交互模式。"""
    _configure_logging(debug)
    cli.run_shell()


if __name__ == "__main__":
    app()
