"""
格式化器基础模块

该模块定义了格式化器的基础接口和策略模式实现
控件树的 Markdown 输出和 C 代码生成共用同一套策略
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models import Widget


# ============================================================================
# 格式化器基础接口
# ============================================================================

class Formatter(ABC):
    """
    格式化器基础接口
    所有具体的格式化器都应该继承此接口
    """

    @abstractmethod
    def format(self, data: Any) -> str:
        """
        格式化数据为字符串

        :param data: 要格式化的数据
        :return: 格式化后的字符串
        """
        pass


# ============================================================================
# 格式化策略模式
# ============================================================================

class FormattingStrategy(ABC):
    """
    格式化策略基类
    定义格式化的通用行为接口
    """

    @abstractmethod
    def get_indent_string(self) -> str:
        """
        获取一级缩进字符串

        :return: 缩进字符串
        """
        pass

    @abstractmethod
    def widget_comment(self, widget: Widget) -> Optional[str]:
        """
        生成代码时放在控件语句块之前的注释行

        :param widget: 当前控件
        :return: 注释行文本，None 表示不输出
        """
        pass

    @abstractmethod
    def source_range(self, widget: Widget) -> str:
        """
        控件树中跟在控件名后面的源码行范围，例如 " [L35-39]"

        :param widget: 当前控件
        :return: 范围文本，不显示时为空字符串
        """
        pass


class ConciseStrategy(FormattingStrategy):
    """
    简洁格式化策略
    2 空格缩进，不输出注释和源码行
    """

    def get_indent_string(self) -> str:
        return "  "  # 2个空格

    def widget_comment(self, widget: Widget) -> Optional[str]:
        return None

    def source_range(self, widget: Widget) -> str:
        return ""


class VerboseStrategy(FormattingStrategy):
    """
    详细格式化策略
    4 空格缩进，每个控件前输出 // <标识符> (<类型>) 注释，控件树中显示源码行范围
    """

    def get_indent_string(self) -> str:
        return "    "  # 4个空格

    def widget_comment(self, widget: Widget) -> Optional[str]:
        return f"// {widget.identifier} ({widget.kind})"

    def source_range(self, widget: Widget) -> str:
        location = widget.source_location
        if not location.line_start:
            return ""
        return f" [L{location.line_start}-{location.line_end}]"
