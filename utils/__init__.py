"""
utils - 工具函数模块

包含:
- vector: 任意维度向量运算
- validation: 输入校验与错误类型
"""

from .validation import CurveFitResourceError, InvalidInputError
from .vector import normalize, normalize_diff

__all__ = [
    "normalize",
    "normalize_diff",
    "InvalidInputError",
    "CurveFitResourceError",
]
