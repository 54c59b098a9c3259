"""
通用构建器工具函数
包含导入构建与代码生成之间共享的树遍历逻辑
"""

from typing import List

from ..models import Widget


def collect_all_widgets(widgets: List[Widget]) -> List[Widget]:
    """
    递归收集所有控件（包括嵌套的子控件），按文档顺序扁平化

    :param widgets: 根级别的 Widget 列表
    :return: 包含所有控件的扁平化列表
    """
    all_widgets = []

    def collect_recursive(nodes):
        for node in nodes:
            all_widgets.append(node)
            if node.children:
                collect_recursive(node.children)

    collect_recursive(widgets)
    return all_widgets


def tree_depth(widgets: List[Widget]) -> int:
    if not widgets:
        return 0
    return 1 + max(tree_depth(w.children) for w in widgets)
