"""
通用函数调用解析工具
基于字面锚点（固定的调用名前缀）和括号配对截取调用参数，
不做完整的表达式解析：嵌套调用和嵌套逗号作为不透明 token 保留。
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple, Union

from ..models import AUTO, Percent, SizeSpec


PCT_RE = re.compile(r"^LV_PCT\s*\(\s*(-?\d+)\s*\)$")
COLOR_HEX_RE = re.compile(r"^lv_color_hex\s*\(\s*(0x[0-9A-Fa-f]+)\s*\)$")
HEX_LITERAL_RE = re.compile(r"^0x[0-9A-Fa-f]+$")

_STRING_DELIMITERS = ('"', "'")
_OPENERS = "([{"
_CLOSERS = ")]}"

HEX_DIGIT_RE = re.compile(r"[0-9A-Fa-f]{1,2}")
OCTAL_DIGIT_RE = re.compile(r"[0-7]{1,3}")
OCTAL_DIGITS = "01234567"

_SIMPLE_ESCAPES = {
    "\\": "\\", '"': '"', "'": "'", "?": "?",
    "n": "\n", "t": "\t", "r": "\r", "a": "\a", "b": "\b", "f": "\f", "v": "\v",
}
_ENCODE_ESCAPES = {"\\": "\\", '"': '"', "\n": "n", "\t": "t", "\r": "r"}


@dataclass
class CallMatch:
    """
    一次调用匹配的结果
    groups 为调用名正则中的捕获组，arguments 为顶层逗号分割后的参数
    """
    name: str
    groups: Tuple[str, ...] = ()
    arguments: List[str] = field(default_factory=list)


def capture_arguments(line: str, open_index: int) -> Optional[str]:
    """
    从左括号位置开始截取配对括号内的文本

    :param line: 源码行
    :param open_index: 左括号在行中的位置
    :return: 括号内文本，括号不配对时返回 None
    """
    depth = 0
    quote = None
    escaped = False
    for index in range(open_index, len(line)):
        char = line[index]
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _STRING_DELIMITERS:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return line[open_index + 1:index]
    return None


def split_arguments(text: str) -> List[str]:
    """按顶层逗号分割参数，忽略括号和字符串内部的逗号"""
    if not text.strip():
        return []

    arguments = []
    current = []
    depth = 0
    quote = None
    escaped = False
    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _STRING_DELIMITERS:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    arguments.append("".join(current).strip())
    return arguments


def match_call(line: str, name_re: Pattern) -> Optional[CallMatch]:
    """
    在行中查找调用并截取参数

    :param line: 源码行
    :param name_re: 匹配调用名的正则，必须以左括号结尾
    :return: CallMatch，没有匹配或括号不配对时返回 None
    """
    match = name_re.search(line)
    if not match:
        return None
    inner = capture_arguments(line, match.end() - 1)
    if inner is None:
        return None
    return CallMatch(
        name=match.group(0)[:-1].strip(),
        groups=match.groups(),
        arguments=split_arguments(inner),
    )


# ============================================================================
# 参数 token 解析
# ============================================================================

def parse_int(token: str) -> Union[int, str]:
    """能按十进制整数解析则返回 int，否则原样返回 token 文本"""
    token = token.strip()
    try:
        return int(token, 10)
    except ValueError:
        return token


def parse_offset(token: str) -> int:
    """坐标偏移必须是整数，无法解析时回退为 0"""
    value = parse_int(token)
    return value if isinstance(value, int) else 0


def parse_size(token: str) -> SizeSpec:
    """LV_PCT(n) -> Percent(n)；整数 -> int；其它（如 LV_SIZE_CONTENT）原样保留"""
    token = token.strip()
    if not token:
        return AUTO
    pct_match = PCT_RE.match(token)
    if pct_match:
        return Percent(int(pct_match.group(1)))
    return parse_int(token)


def format_size(size: SizeSpec) -> str:
    if isinstance(size, Percent):
        return f"LV_PCT({size.value})"
    return str(size)


def unwrap_color(token: str) -> str:
    """lv_color_hex(0x00FFFF) -> 0x00FFFF；其它颜色表达式原样保留"""
    token = token.strip()
    color_match = COLOR_HEX_RE.match(token)
    if color_match:
        return color_match.group(1)
    return token


def wrap_color(value: str) -> str:
    if HEX_LITERAL_RE.match(value):
        return f"lv_color_hex({value})"
    return value


def _scan_literal(token: str, start: int) -> Optional[Tuple[str, int]]:
    """从 start 处的引号开始截取一个字符串字面量的主体，返回 (主体, 结束引号之后的位置)"""
    index = start + 1
    while index < len(token):
        char = token[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return token[start + 1:index], index + 1
        index += 1
    return None


def _decode_body(body: str) -> bytes:
    """按 C 语义把单个字面量主体解码为字节序列"""
    result = bytearray()
    index = 0
    while index < len(body):
        char = body[index]
        if char != "\\" or index + 1 >= len(body):
            result.extend(char.encode("utf-8"))
            index += 1
            continue

        following = body[index + 1]
        if following in _SIMPLE_ESCAPES:
            result.append(ord(_SIMPLE_ESCAPES[following]))
            index += 2
        elif following == "x" and HEX_DIGIT_RE.match(body, index + 2):
            # 最多取两位十六进制数字，对应一个字节
            digits = HEX_DIGIT_RE.match(body, index + 2).group(0)
            result.append(int(digits, 16))
            index += 2 + len(digits)
        elif following in OCTAL_DIGITS:
            digits = OCTAL_DIGIT_RE.match(body, index + 1).group(0)
            result.append(int(digits, 8) & 0xFF)
            index += 1 + len(digits)
        else:
            # 未知转义按编译器惯例只保留被转义的字符
            result.extend(following.encode("utf-8"))
            index += 2
    return bytes(result)


def decode_string(token: str) -> Optional[str]:
    """
    解码 C 字符串字面量，相邻的字面量（"a" "b"）按 C 规则拼接

    \\xHH 与八进制转义得到的字节按 UTF-8 解释，无法解码的字节以 surrogateescape 形式保留，
    encode_string 会把它们还原为原字节

    :return: 解码后的文本，token 不是（仅由）字符串字面量（组成）时返回 None
    """
    token = token.strip()
    if not token.startswith('"'):
        return None

    data = bytearray()
    index = 0
    while index < len(token):
        if token[index].isspace():
            index += 1
            continue
        if token[index] != '"':
            return None
        scanned = _scan_literal(token, index)
        if scanned is None:
            return None
        body, index = scanned
        data.extend(_decode_body(body))
    return data.decode("utf-8", errors="surrogateescape")


def encode_string(text: str) -> str:
    """
    把文本编码为带引号的 C 字符串字面量
    控制字符和无法按 UTF-8 表示的字节使用三位八进制转义，其余非 ASCII 字符按 UTF-8 原样输出
    """
    parts = ['"']
    for char in text:
        code = ord(char)
        if char in _ENCODE_ESCAPES:
            parts.append("\\" + _ENCODE_ESCAPES[char])
        elif 0xDC80 <= code <= 0xDCFF:
            parts.append(f"\\{code - 0xDC00:03o}")
        elif code < 0x20 or code == 0x7F:
            parts.append(f"\\{code:03o}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


# ============================================================================
# 注释
# ============================================================================

def strip_comments(line: str, in_block_comment: bool = False) -> Tuple[str, bool]:
    """
    去掉一行中的 // 行注释和 /* ... */ 块注释，字符串字面量中的注释标记不受影响

    :param line: 源码行
    :param in_block_comment: 该行开始时是否处于未闭合的块注释中
    :return: (去掉注释后的代码, 该行结束时是否仍处于块注释中)
    """
    code = []
    quote = None
    index = 0
    while index < len(line):
        char = line[index]
        if in_block_comment:
            if line.startswith("*/", index):
                in_block_comment = False
                code.append(" ")
                index += 2
            else:
                index += 1
            continue
        if quote:
            code.append(char)
            if char == "\\" and index + 1 < len(line):
                code.append(line[index + 1])
                index += 2
                continue
            if char == quote:
                quote = None
            index += 1
            continue
        if char in _STRING_DELIMITERS:
            quote = char
        elif line.startswith("//", index):
            break
        elif line.startswith("/*", index):
            in_block_comment = True
            index += 2
            continue
        code.append(char)
        index += 1
    return "".join(code), in_block_comment
