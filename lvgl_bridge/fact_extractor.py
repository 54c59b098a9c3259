"""fact_extractor.py
LVGL 源码事实提取器

逐行扫描源码，用一组有序的识别器匹配固定的调用模式，
输出扁平的事实列表。每个识别器属于一个类别（声明、创建、属性、样式、布局），
同一行在每个类别中最多产生一个事实，各类别之间相互独立。
无法识别的行直接跳过：输入是真实的应用代码，而不是受约束的语法。"""

# ================================================================
# 依赖导入
# ================================================================

import logging
import re
from typing import List, Optional

from .facts import (
    Fact, Declared, Created, SetText, SetSize, SetValue, SetRange,
    SetStyle, SetAlign, SetCenter, SetPos, describe,
)
from .mappings import SOURCE_TO_KIND, STYLE_SETTERS, COLOR_STYLES, FONT_STYLES
from .common.call_parser import (
    match_call, parse_int, parse_offset, parse_size, unwrap_color, decode_string, strip_comments,
)
from .common.decorators import RecognizerRegistry, register_recognizer, recognizer_registry, CATEGORIES

logger = logging.getLogger(__name__)


IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*$")

DECLARATION_RE = re.compile(r"^(?:static\s+)?lv_obj_t\s*\*\s*(\w+)\s*=\s*(?:NULL|nullptr)\s*;")
CREATE_RE = re.compile(r"\b(\w+)\s*=\s*lv_(\w+)_create\s*\(")
TEXT_RE = re.compile(r"\blv_(\w+?)_set_text\s*\(")
SIZE_RE = re.compile(r"\blv_obj_set_size\s*\(")
VALUE_RE = re.compile(r"\blv_(\w+?)_set_value\s*\(")
RANGE_RE = re.compile(r"\blv_(\w+?)_set_range\s*\(")
KNOWN_STYLE_RE = re.compile(r"\blv_obj_set_style_(" + "|".join(STYLE_SETTERS) + r")\s*\(")
ANY_STYLE_RE = re.compile(r"\blv_obj_set_style_(\w+?)\s*\(")
ALIGN_RE = re.compile(r"\blv_obj_align\s*\(")
CENTER_RE = re.compile(r"\blv_obj_center\s*\(")
POS_RE = re.compile(r"\blv_obj_set_pos\s*\(")


def _target(arguments: List[str]) -> Optional[str]:
    """第一个参数必须是普通标识符，否则该调用不作为事实"""
    if not arguments or not IDENTIFIER_RE.match(arguments[0]):
        return None
    return arguments[0]


# ================================================================
# 声明与创建
# ================================================================

@register_recognizer("declaration")
def recognize_declaration(line: str, line_num: int) -> Optional[Fact]:
    match = DECLARATION_RE.match(line)
    if not match:
        return None
    return Declared(identifier=match.group(1), line=line_num)


@register_recognizer("creation")
def recognize_creation(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, CREATE_RE)
    if not call:
        return None
    identifier, source_name = call.groups
    # 无法识别的源码类型名原样保留，生成时再回退为 obj
    return Created(
        identifier=identifier,
        line=line_num,
        kind=SOURCE_TO_KIND.get(source_name, source_name),
        source_name=source_name,
        parent_argument=call.arguments[0] if call.arguments else "",
    )


# ================================================================
# 属性设置
# ================================================================

@register_recognizer("property")
def recognize_text(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, TEXT_RE)
    if not call or len(call.arguments) != 2:
        return None
    identifier = _target(call.arguments)
    text = decode_string(call.arguments[1])
    if identifier is None or text is None:
        return None
    return SetText(identifier=identifier, line=line_num, text=text)


@register_recognizer("property")
def recognize_size(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, SIZE_RE)
    if not call or len(call.arguments) != 3:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetSize(
        identifier=identifier,
        line=line_num,
        width=parse_size(call.arguments[1]),
        height=parse_size(call.arguments[2]),
    )


@register_recognizer("property")
def recognize_value(line: str, line_num: int) -> Optional[Fact]:
    # lv_bar_set_value(bar, 40, LV_ANIM_OFF) 的动画参数被忽略
    call = match_call(line, VALUE_RE)
    if not call or len(call.arguments) < 2:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetValue(identifier=identifier, line=line_num, value=parse_int(call.arguments[1]))


@register_recognizer("property")
def recognize_range(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, RANGE_RE)
    if not call or len(call.arguments) != 3:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetRange(
        identifier=identifier,
        line=line_num,
        range_min=parse_int(call.arguments[1]),
        range_max=parse_int(call.arguments[2]),
    )


# ================================================================
# 样式设置
# ================================================================

def _style_value(style_key: str, token: str) -> str:
    if style_key in COLOR_STYLES:
        return unwrap_color(token)
    if style_key in FONT_STYLES:
        return token[1:].strip() if token.startswith("&") else token
    return token


@register_recognizer("style")
def recognize_known_style(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, KNOWN_STYLE_RE)
    if not call or len(call.arguments) < 2:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    style_key = STYLE_SETTERS[call.groups[0]]
    return SetStyle(
        identifier=identifier,
        line=line_num,
        style_key=style_key,
        value=_style_value(style_key, call.arguments[1]),
    )


@register_recognizer("style")
def recognize_other_style(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, ANY_STYLE_RE)
    if not call or len(call.arguments) < 2:
        return None
    style_key = call.groups[0]
    if style_key in STYLE_SETTERS:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetStyle(identifier=identifier, line=line_num, style_key=style_key, value=call.arguments[1])


# ================================================================
# 布局
# ================================================================

@register_recognizer("layout")
def recognize_align(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, ALIGN_RE)
    if not call or len(call.arguments) != 4:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    x_token, y_token = call.arguments[2], call.arguments[3]
    if not isinstance(parse_int(x_token), int) or not isinstance(parse_int(y_token), int):
        logger.debug("L%d: 非整数偏移 (%s, %s) 按 0 处理", line_num, x_token, y_token)
    return SetAlign(
        identifier=identifier,
        line=line_num,
        align=call.arguments[1],
        x=parse_offset(x_token),
        y=parse_offset(y_token),
    )


@register_recognizer("layout")
def recognize_center(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, CENTER_RE)
    if not call or len(call.arguments) != 1:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetCenter(identifier=identifier, line=line_num)


@register_recognizer("layout")
def recognize_pos(line: str, line_num: int) -> Optional[Fact]:
    call = match_call(line, POS_RE)
    if not call or len(call.arguments) != 3:
        return None
    identifier = _target(call.arguments)
    if identifier is None:
        return None
    return SetPos(
        identifier=identifier,
        line=line_num,
        x=parse_offset(call.arguments[1]),
        y=parse_offset(call.arguments[2]),
    )


# ================================================================
# 提取器
# ================================================================

class FactExtractor:
    """
    事实提取器
    职责：将源码文本转换为扁平的事实列表
    不维护任何控件状态，可被反复用于不同文件
    """

    def __init__(self, registry: RecognizerRegistry = None):
        self.registry = registry or recognizer_registry

    def extract(self, source_text: str) -> List[Fact]:
        """
        提取源码中的全部事实

        :param source_text: 源文件文本
        :return: 按行号顺序排列的事实列表
        """
        if not source_text or not source_text.strip():
            return []

        facts: List[Fact] = []
        in_block_comment = False
        for line_num, raw_line in enumerate(source_text.splitlines(), 1):
            line = raw_line.strip()

            # 移除可能的BOM字符
            if line.startswith('\ufeff'):
                line = line[1:]

            # 块注释可能跨越多行，状态在行之间延续
            line, in_block_comment = strip_comments(line, in_block_comment)
            line = line.strip()

            # 跳过空行和不含 LVGL 调用的行
            if not line or "lv_" not in line:
                continue

            facts.extend(self.extract_line(line, line_num))
        return facts

    def extract_line(self, line: str, line_num: int) -> List[Fact]:
        """对单行依次测试每个类别，每个类别最多产生一个事实"""
        facts = []
        for category in CATEGORIES:
            for recognizer in self.registry.get_recognizers(category):
                try:
                    fact = recognizer(line, line_num)
                except Exception as e:
                    # 识别失败时继续尝试，不中断整个提取过程
                    logger.warning("Failed to recognize line %d with %s: %s - %s",
                                   line_num, recognizer.__name__, line, e)
                    continue
                if fact is not None:
                    logger.debug(describe(fact))
                    facts.append(fact)
                    break
        return facts


def extract_facts(source_text: str) -> List[Fact]:
    """便捷函数：使用默认识别器目录提取事实"""
    return FactExtractor().extract(source_text)
