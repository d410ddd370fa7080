"""
core - 核心算法模块

包含:
- cubic: 三次 Bézier 段与段链
- parameterize: 弦长参数化
- least_squares: 最小二乘控制柄拟合
- error: 拟合误差评估
- reparameterize: Newton-Raphson 重参数化
- fitter: 自适应细分拟合
- assembler: 段链展平为节点数组
- config: 拟合参数
"""

from .assembler import FitResult, cubic_list_as_array
from .config import FitConfig
from .cubic import Cubic, CubicList
from .error import cubic_calc_error
from .fitter import fit_cubic_to_points
from .least_squares import cubic_from_points
from .parameterize import chord_length_parameterize, points_length_cache
from .reparameterize import cubic_reparameterize

__all__ = [
    "FitResult",
    "cubic_list_as_array",
    "FitConfig",
    "Cubic",
    "CubicList",
    "cubic_calc_error",
    "fit_cubic_to_points",
    "cubic_from_points",
    "chord_length_parameterize",
    "points_length_cache",
    "cubic_reparameterize",
]
