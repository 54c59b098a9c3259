"""
装饰器工具模块
包含用于识别器注册的装饰器
"""

from typing import Callable, Dict, List, Tuple


CATEGORIES = ("declaration", "creation", "property", "style", "layout")


class RecognizerRegistry:
    """
    识别器注册表
    按类别保存有序的识别器列表；同一类别内按注册顺序尝试，第一个命中者生效
    """

    def __init__(self):
        self._recognizers: Dict[str, List[Callable]] = {category: [] for category in CATEGORIES}

    def register(self, category: str):
        """
        注册识别器的装饰器

        :param category: 识别器类别，必须是 CATEGORIES 之一
        :return: 装饰器函数
        """
        if category not in self._recognizers:
            raise ValueError(f"未知的识别器类别: {category}")

        def decorator(recognizer_func: Callable):
            self._recognizers[category].append(recognizer_func)
            return recognizer_func
        return decorator

    def get_recognizers(self, category: str) -> List[Callable]:
        return list(self._recognizers.get(category, []))

    def catalogue(self) -> List[Tuple[str, Callable]]:
        """按类别顺序展开的 (类别, 识别器) 列表"""
        return [(category, func) for category in CATEGORIES for func in self._recognizers[category]]


# 全局注册表实例
recognizer_registry = RecognizerRegistry()

# 导出装饰器函数
register_recognizer = recognizer_registry.register
