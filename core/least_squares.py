"""
least_squares - 最小二乘拟合三次 Bézier 控制柄

给定区间点、参数值和两端切线，求解 2x2 法方程得到两个控制柄长度
alpha_l, alpha_r，并将控制柄限制在加权中心附近以避免稀疏或噪声数据上的过冲。
"""

import numpy as np

from .cubic import Cubic


def B1(u: np.ndarray) -> np.ndarray:
    tmp = 1.0 - u
    return 3.0 * u * tmp * tmp


def B2(u: np.ndarray) -> np.ndarray:
    return 3.0 * u * u * (1.0 - u)


def B0plusB1(u: np.ndarray) -> np.ndarray:
    tmp = 1.0 - u
    return tmp * tmp * (1.0 + 2.0 * u)


def B2plusB3(u: np.ndarray) -> np.ndarray:
    return u * u * (3.0 - 2.0 * u)


def points_calc_center_weighted(points: np.ndarray) -> np.ndarray:
    """
    计算补偿采样间距的加权中心。

    每个点的权重为与其相邻两点的弦长之和，区间视为首尾相连的闭合多边形。

    Args:
        points: (N, dims) 区间内的点

    Returns:
        (dims,) 加权中心
    """
    # chord[i] = |p[i] - p[i-1]|, chord[0] 为首尾闭合边
    chord = np.linalg.norm(points - np.roll(points, 1, axis=0), axis=1)
    weights = chord + np.roll(chord, -1)
    w_tot = np.sum(weights)
    if w_tot == 0.0:
        return np.zeros(points.shape[1])
    return weights @ points / w_tot


def _solve_alphas(
    points: np.ndarray,
    u: np.ndarray,
    tan_l: np.ndarray,
    tan_r: np.ndarray,
    det_epsilon: float,
    det_perturbation: float,
) -> tuple[float, float]:
    """构造并求解法方程，返回 (alpha_l, alpha_r)，可能为负或非有限值"""
    p0 = points[0]
    p3 = points[-1]

    # A[i, 0] = tan_l * B1(u_i), A[i, 1] = -tan_r * B2(u_i)
    a0 = B1(u)[:, np.newaxis] * tan_l
    a1 = -B2(u)[:, np.newaxis] * tan_r

    c00 = np.sum(a0 * a0)
    c01 = np.sum(a0 * a1)
    c11 = np.sum(a1 * a1)

    # 残差: 样本点减去仅由端点决定的部分
    tmp = points - np.outer(B0plusB1(u), p0) - np.outer(B2plusB3(u), p3)
    x0 = np.sum(a0 * tmp)
    x1 = np.sum(a1 * tmp)

    det_c0_c1 = c00 * c11 - c01 * c01
    det_c0_x = c00 * x1 - c01 * x0
    det_x_c1 = x0 * c11 - x1 * c01

    if abs(det_c0_c1) < det_epsilon:
        det_c0_c1 = c00 * c11 * det_perturbation

    if det_c0_c1 == 0.0:
        return np.nan, np.nan

    return det_x_c1 / det_c0_c1, det_c0_x / det_c0_c1


def cubic_from_points(
    points: np.ndarray,
    u: np.ndarray,
    tan_l: np.ndarray,
    tan_r: np.ndarray,
    clamp_scale: float = 3.0,
    det_epsilon: float = 1e-8,
    det_perturbation: float = 1e-11,
) -> Cubic:
    """
    最小二乘法求区间的 Bézier 控制点。

    退化处理:
        - 行列式接近零时以 c00 * c11 * det_perturbation 代替
        - alpha 为负或非有限值时取 |p0 - p3| / 3

    限制:
        以加权中心为球心、clamp_scale 倍最远样本距离为半径。控制柄超出时先改用
        对称的 |p0 - p3| / 3 控制柄，仍超出则沿径向投影到球面上。

    Args:
        points: (N, dims) 区间内的点, N >= 2
        u: (N,) 参数值
        tan_l: (dims,) 左端沿行进方向的单位切线
        tan_r: (dims,) 右端沿行进方向的单位切线
        clamp_scale: 控制柄限制半径倍数
        det_epsilon: 行列式视为零的阈值
        det_perturbation: 行列式退化时的扰动系数

    Returns:
        Cubic 对象, orig_span = N - 1
    """
    p0 = points[0]
    p3 = points[-1]

    alpha_l, alpha_r = _solve_alphas(points, u, tan_l, tan_r, det_epsilon, det_perturbation)

    if not (np.isfinite(alpha_l) and np.isfinite(alpha_r) and alpha_l >= 0.0 and alpha_r >= 0.0):
        alpha_l = alpha_r = np.linalg.norm(p0 - p3) / 3.0

    cubic = Cubic.from_handles(p0, p3, tan_l, tan_r, alpha_l, alpha_r, orig_span=len(points) - 1)

    center = points_calc_center_weighted(points)
    dist_sq_max = np.max(np.sum(((points - center) * clamp_scale) ** 2, axis=1))

    p1 = cubic.points[1]
    p2 = cubic.points[2]
    p1_dist_sq = np.sum((p1 - center) ** 2)
    p2_dist_sq = np.sum((p2 - center) ** 2)

    if p1_dist_sq > dist_sq_max or p2_dist_sq > dist_sq_max:
        alpha = np.linalg.norm(p0 - p3) / 3.0
        p1[:] = p0 + tan_l * alpha
        p2[:] = p3 - tan_r * alpha

        p1_dist_sq = np.sum((p1 - center) ** 2)
        p2_dist_sq = np.sum((p2 - center) ** 2)

    if p1_dist_sq > dist_sq_max:
        p1[:] = center + (p1 - center) * (np.sqrt(dist_sq_max) / np.sqrt(p1_dist_sq))
    if p2_dist_sq > dist_sq_max:
        p2[:] = center + (p2 - center) * (np.sqrt(dist_sq_max) / np.sqrt(p2_dist_sq))

    return cubic


if __name__ == "__main__":
    from curve_fit_nd.core.parameterize import chord_length_parameterize

    print("=== 最小二乘控制柄拟合测试 ===")

    t = np.linspace(0, np.pi / 2, 9)
    points = np.column_stack([np.cos(t), np.sin(t)])
    u = chord_length_parameterize(points)
    tan_l = np.array([0.0, 1.0])
    tan_r = np.array([-1.0, 0.0])

    cubic = cubic_from_points(points, u, tan_l, tan_r)
    print(f"控制点:\n{cubic.points}")
    errors = np.linalg.norm(cubic.evaluate(u) - points, axis=1)
    print(f"拟合误差: max={errors.max():.2e}")
