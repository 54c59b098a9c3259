"""
通用工具模块
包含调用解析、装饰器、构建器等通用功能
"""

# 调用解析工具
from .call_parser import (
    CallMatch, capture_arguments, split_arguments, match_call,
    # 参数 token 解析
    parse_int, parse_offset, parse_size, format_size,
    unwrap_color, wrap_color, decode_string, encode_string, strip_comments
)

# 装饰器系统
from .decorators import register_recognizer, recognizer_registry, CATEGORIES

# 构建器工具
from .builder_utils import collect_all_widgets, tree_depth

__all__ = [
    # 调用解析工具
    'CallMatch', 'capture_arguments', 'split_arguments', 'match_call',
    # 参数 token 解析
    'parse_int', 'parse_offset', 'parse_size', 'format_size',
    'unwrap_color', 'wrap_color', 'decode_string', 'encode_string', 'strip_comments',
    # 装饰器系统
    'register_recognizer', 'recognizer_registry', 'CATEGORIES',
    # 构建器工具
    'collect_all_widgets', 'tree_depth'
]
