"""
格式化器包

该包包含了把控件树转换为不同输出格式的格式化器：Markdown 控件树和 LVGL C 代码
"""

# 导入基础类
from .base import Formatter, FormattingStrategy, VerboseStrategy, ConciseStrategy

# 导入具体的格式化器
from .widget_formatter import WidgetTreeFormatter
from .code_generator import CodeGenerator

# 公共接口
__all__ = [
    # 基础类
    'Formatter',
    'FormattingStrategy',
    'VerboseStrategy',
    'ConciseStrategy',

    # Widget树格式化器
    'WidgetTreeFormatter',

    # 代码生成器
    'CodeGenerator',
]
