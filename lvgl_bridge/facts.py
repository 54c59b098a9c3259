"""
事实（Fact）定义

事实是从单行源码中提取出的原子信息，总是带有目标控件的标识符和行号。
事实提取器只产生事实，不维护任何控件状态；控件的构建由 HierarchyBuilder 完成。
"""

from dataclasses import dataclass
from typing import Optional, Union

from .models import SizeSpec


@dataclass
class Fact:
    """所有事实的基类"""
    identifier: str
    line: int


@dataclass
class Declared(Fact):
    """全局占位声明，例如: lv_obj_t * scale_label = NULL;"""
    declared_type: str = "lv_obj_t"


@dataclass
class Created(Fact):
    """
    控件创建，例如: tare_btn = lv_btn_create(parent);
    parent_argument 保留创建调用中父参数的原始文本
    """
    kind: str = ""
    source_name: str = ""
    parent_argument: str = ""


@dataclass
class SetText(Fact):
    text: str = ""


@dataclass
class SetSize(Fact):
    width: SizeSpec = "auto"
    height: SizeSpec = "auto"


@dataclass
class SetValue(Fact):
    value: Union[int, str] = 0


@dataclass
class SetRange(Fact):
    range_min: Union[int, str] = 0
    range_max: Union[int, str] = 0


@dataclass
class SetStyle(Fact):
    style_key: str = ""
    value: str = ""


@dataclass
class SetAlign(Fact):
    align: str = ""
    x: int = 0
    y: int = 0


@dataclass
class SetCenter(Fact):
    pass


@dataclass
class SetPos(Fact):
    x: int = 0
    y: int = 0


FactType = Union[Declared, Created, SetText, SetSize, SetValue, SetRange, SetStyle, SetAlign, SetCenter, SetPos]


def describe(fact: Fact) -> str:
    """单行可读描述，用于调试日志"""
    name = type(fact).__name__
    details: Optional[str] = None
    if isinstance(fact, Created):
        details = f"{fact.kind} <- {fact.parent_argument}"
    elif isinstance(fact, SetStyle):
        details = f"{fact.style_key}={fact.value}"
    if details:
        return f"L{fact.line} {name}({fact.identifier}, {details})"
    return f"L{fact.line} {name}({fact.identifier})"
