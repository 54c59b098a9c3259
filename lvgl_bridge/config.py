"""
配置模块
导入与导出的可调选项，全部带有与 LVGL Arduino 工程惯例一致的默认值
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ImportOptions:
    """
    导入选项

    :param root_placeholders: 创建调用中表示“调用方传入的父对象”的参数名
    :param source_extensions: 扫描时收集的源文件扩展名
    :param main_extensions: 含 LVGL 代码时被视为主文件的扩展名
    :param skip_dirs: 扫描时跳过的目录
    :param lvgl_markers: 判断文件是否含 LVGL 代码的标记
    """
    root_placeholders: Tuple[str, ...] = ("parent",)
    source_extensions: Tuple[str, ...] = (".cpp", ".c", ".ino", ".h", ".hpp")
    main_extensions: Tuple[str, ...] = (".cpp", ".ino")
    skip_dirs: Tuple[str, ...] = ("node_modules", ".git", "build", "dist")
    lvgl_markers: Tuple[str, ...] = ("lv_obj", "lvgl")
    encoding: str = "utf-8"


@dataclass
class ExportOptions:
    """
    导出选项

    :param header_name: 声明文件名
    :param lvgl_include: 声明文件中的 LVGL 头文件包含语句
    :param function_suffix: 屏幕创建函数名后缀，函数名为 <screen><suffix>
    :param default_screen_name: 传入的是裸控件列表时使用的屏幕名
    :param parent_name: 创建函数的参数名，也是根控件的父引用
    :param verbose: True 使用 VerboseStrategy（4 空格缩进并在每个控件前输出注释行），False 使用 ConciseStrategy
    """
    header_name: str = "ui.h"
    lvgl_include: str = '#include "lvgl/lvgl.h"'
    function_suffix: str = "_create"
    default_screen_name: str = "main_screen"
    parent_name: str = "parent"
    verbose: bool = True
    encoding: str = "utf-8"
