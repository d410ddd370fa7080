"""
curve_fit_nd - N 维自适应三次 Bézier 曲线拟合库

将有序采样点拟合为尽量少的三次 Bézier 段，偏差控制在给定容差内，
并精确经过指定的角点。算法结合约束最小二乘、Newton-Raphson 重参数化
与自适应细分。
"""

from .algorithm import CubicCurveFit, fit_curve, fit_curve_float32
from .core.assembler import FitResult
from .core.config import FitConfig
from .utils.validation import CurveFitResourceError, InvalidInputError

__version__ = "0.1.0"
__all__ = [
    "fit_curve",
    "fit_curve_float32",
    "CubicCurveFit",
    "FitResult",
    "FitConfig",
    "InvalidInputError",
    "CurveFitResourceError",
]
