"""
error - 拟合误差评估
"""

import numpy as np

from .cubic import Cubic


def cubic_calc_error(cubic: Cubic, points: np.ndarray, u: np.ndarray) -> tuple[float, int]:
    """
    计算样本点与拟合曲线对应点之间的最大平方偏差。

    端点由构造保证精确，只评估内部点。多个点误差相同时取索引较大者，
    该规则决定细分位置，需保持不变。

    Args:
        cubic: 当前拟合段
        points: (N, dims) 区间内的点
        u: (N,) 参数值

    Returns:
        error_sq_max: 最大平方误差，无内部点时为 0
        error_index: 最大误差所在的点索引，无内部点时为 0
    """
    if len(points) <= 2:
        return 0.0, 0

    pt_eval = cubic.evaluate(u[1:-1])
    err_sq = np.sum((points[1:-1] - pt_eval) ** 2, axis=1)

    # 反向 argmax 得到最后一个最大值
    last = len(err_sq) - 1 - int(np.argmax(err_sq[::-1]))
    return float(err_sq[last]), last + 1
