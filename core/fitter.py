"""
fitter - 自适应细分拟合

对一个区间依次执行:
1. 两点区间: 闭式解直接接受
2. 弦长参数化 + 最小二乘拟合 + 误差评估，误差小于阈值则接受
3. 最多 iteration_max 轮 Newton 重参数化 + 重新拟合
4. 仍不满足时在最大误差点处细分，两半使用同一中间切线分别拟合

细分以显式工作栈代替递归，左半区间先出栈，保证段按曲线顺序追加。
"""

import logging

import numpy as np

from .config import FitConfig
from .cubic import Cubic, CubicList
from .error import cubic_calc_error
from .least_squares import cubic_from_points
from .parameterize import chord_length_parameterize
from .reparameterize import cubic_reparameterize

logger = logging.getLogger(__name__)


def split_tangent(points: np.ndarray, split_index: int) -> np.ndarray:
    """
    计算细分点处沿行进方向的单位切线。

    取细分点前后相邻两点的方向；若两点重合，则起点前移一位改用细分点本身。
    仍为零长度时返回零向量 (控制柄退化到端点)。

    Args:
        points: (N, dims) 区间内的点
        split_index: 细分点索引, 1 <= split_index <= N-2

    Returns:
        (dims,) 单位切线或零向量
    """
    pt_a = points[split_index - 1]
    pt_b = points[split_index + 1]
    if np.array_equal(pt_a, pt_b):
        pt_a = points[split_index]

    d = pt_b - pt_a
    norm = np.linalg.norm(d)
    if norm == 0.0:
        return np.zeros_like(d)
    return d / norm


def _fit_span(
    points: np.ndarray,
    length_cache: np.ndarray | None,
    tan_l: np.ndarray,
    tan_r: np.ndarray,
    error_sq: float,
    config: FitConfig,
    force: bool,
) -> tuple[Cubic | None, int]:
    """
    尝试用单段拟合区间。

    Returns:
        cubic: 被接受的段，失败时为 None
        split_index: 失败时最近一次误差评估给出的细分索引
    """
    if len(points) == 2:
        return Cubic.from_two_points(points[0], points[1], tan_l, tan_r), 0

    if not np.any(points != points[0]):
        logger.debug("Span of %d coincident points emitted as a degenerate cubic", len(points))
        p = points[0]
        return Cubic(p, p, p, p, orig_span=len(points) - 1), 0

    u = chord_length_parameterize(points, length_cache, check_cache=config.check_length_cache)

    def fit(params):
        return cubic_from_points(
            points, params, tan_l, tan_r,
            clamp_scale=config.clamp_scale,
            det_epsilon=config.det_epsilon,
            det_perturbation=config.det_perturbation,
        )

    cubic = fit(u)
    error_sq_max, split_index = cubic_calc_error(cubic, points, u)

    if error_sq_max < error_sq:
        cubic.error_sq = error_sq_max
        return cubic, split_index

    for _ in range(config.iteration_max):
        u_prime = cubic_reparameterize(cubic, points, u)
        if u_prime is None:
            break

        cubic = fit(u_prime)
        error_sq_max, split_index = cubic_calc_error(cubic, points, u_prime)

        if error_sq_max < error_sq:
            cubic.error_sq = error_sq_max
            return cubic, split_index

        u = u_prime

    if force:
        logger.debug(
            "Depth limit reached, accepting %d point span with error %.3g",
            len(points), np.sqrt(error_sq_max),
        )
        cubic.error_sq = error_sq_max
        return cubic, split_index

    return None, split_index


def fit_cubic_to_points(
    points: np.ndarray,
    tan_l: np.ndarray,
    tan_r: np.ndarray,
    error_threshold: float,
    clist: CubicList,
    length_cache: np.ndarray | None = None,
    config: FitConfig | None = None,
) -> int:
    """
    将区间拟合为若干三次 Bézier 段并按顺序追加到 clist。

    Args:
        points: (N, dims) 区间内的点, N >= 2
        tan_l: (dims,) 左端沿行进方向的单位切线
        tan_r: (dims,) 右端沿行进方向的单位切线
        error_threshold: 允许的最大偏差 (与坐标同单位)
        clist: 输出段链
        length_cache: 可选 (N,) 相邻点距离缓存
        config: 拟合参数

    Returns:
        追加的段数
    """
    if config is None:
        config = FitConfig()

    error_sq = error_threshold * error_threshold
    count = 0

    # (first, last, tan_l, tan_r, depth)
    stack = [(0, len(points) - 1, tan_l, tan_r, 0)]
    while stack:
        first, last, span_tan_l, span_tan_r, depth = stack.pop()
        span = points[first:last + 1]
        span_cache = None if length_cache is None else length_cache[first:last + 1]
        force = config.max_depth is not None and depth >= config.max_depth

        cubic, split_index = _fit_span(
            span, span_cache, span_tan_l, span_tan_r, error_sq, config, force
        )
        if cubic is not None:
            clist.append(cubic)
            count += 1
            continue

        tan_center = split_tangent(span, split_index)
        split = first + split_index
        logger.debug("Splitting span [%d, %d] at %d", first, last, split)

        stack.append((split, last, tan_center, span_tan_r, depth + 1))
        stack.append((first, split, span_tan_l, tan_center, depth + 1))

    return count
