"""
reparameterize - Newton-Raphson 重参数化

对每个样本点求曲线上的最近点参数:
    u' = u - ((C(u) - P)·C'(u)) / (|C'(u)|² + (C(u) - P)·C''(u))
"""

import numpy as np

from .cubic import Cubic


def cubic_find_root(cubic: Cubic, points: np.ndarray, u: np.ndarray) -> np.ndarray:
    """
    对所有样本点做一步 Newton-Raphson 迭代。

    Args:
        cubic: 当前拟合段
        points: (N, dims) 样本点
        u: (N,) 当前参数值

    Returns:
        (N,) 新参数值，分母为零时可能为 nan 或 inf，由调用方检查
    """
    q0_u = cubic.calc_point(u) - points
    q1_u = cubic.calc_speed(u)
    q2_u = cubic.calc_acceleration(u)

    numerator = np.sum(q0_u * q1_u, axis=1)
    denominator = np.sum(q1_u * q1_u, axis=1) + np.sum(q0_u * q2_u, axis=1)

    with np.errstate(divide="ignore", invalid="ignore"):
        return u - numerator / denominator


def cubic_reparameterize(cubic: Cubic, points: np.ndarray, u: np.ndarray) -> np.ndarray | None:
    """
    尝试为样本点找到更好的参数化。

    Newton 步不保证单调，结果排序后须落在 [0, 1] 内才被接受。

    Args:
        cubic: 当前拟合段
        points: (N, dims) 样本点
        u: (N,) 当前参数值

    Returns:
        u_prime: (N,) 排序后的新参数值；存在非有限值或越界时返回 None
    """
    u_prime = cubic_find_root(cubic, points, u)

    if not np.all(np.isfinite(u_prime)):
        return None

    u_prime.sort()

    if u_prime[0] < 0.0 or u_prime[-1] > 1.0:
        return None

    return u_prime


if __name__ == "__main__":
    print("=== Newton-Raphson 重参数化测试 ===")

    line = Cubic([0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 0.0])
    points = np.array([[0.0, 0.0], [1.5, 0.0], [3.0, 0.0]])
    u = np.array([0.0, 0.4, 1.0])
    print(f"初始参数: {u}")
    print(f"新参数: {cubic_reparameterize(line, points, u)}")
