"""
algorithm - 自适应三次 Bézier 曲线拟合主算法

给定有序的 N 维采样点和误差容差，生成尽量少的三次 Bézier 段，
使分段曲线与采样点的偏差在容差之内，并精确经过调用方指定的角点。

该模块提供:
1. fit_curve: 公共入口，返回 FitResult
2. fit_curve_float32: 单精度输入输出的包装
3. CubicCurveFit: 拟合并在全局参数上求值的曲线对象
"""

import logging

import numpy as np
from scipy.interpolate import BPoly

from .core.assembler import FitResult, cubic_list_as_array
from .core.config import FitConfig
from .core.cubic import Cubic, CubicList
from .core.fitter import fit_cubic_to_points
from .core.parameterize import points_length_cache
from .utils.validation import (
    CurveFitResourceError,
    as_points_array,
    validate_corners,
    validate_error_threshold,
)
from .utils.vector import normalize_diff

logger = logging.getLogger(__name__)


def corner_tangents(span: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    估计角点区间两端沿行进方向的单位切线。

    使用角点与其相邻点的方向，相邻点与角点重合时向内跳过。

    Args:
        span: (N, dims) 角点区间内的点, N >= 2 且总长度非零

    Returns:
        tan_l: (dims,) 左端切线
        tan_r: (dims,) 右端切线
    """
    moved_l = np.any(span[1:] != span[0], axis=1)
    moved_r = np.any(span[:-1] != span[-1], axis=1)
    next_l = 1 + int(np.argmax(moved_l))
    prev_r = len(moved_r) - 1 - int(np.argmax(moved_r[::-1]))

    tan_l = normalize_diff(span[0], span[next_l])
    tan_r = normalize_diff(span[prev_r], span[-1])
    return tan_l, tan_r


def _fit_corner_spans(
    points: np.ndarray,
    corners: np.ndarray,
    error_threshold: float,
    config: FitConfig,
    clist: CubicList,
) -> list[int]:
    """逐个角点区间拟合，返回每个角点所在的节点索引"""
    corner_index = [int(corners[0])]

    for first, last in zip(corners[:-1], corners[1:]):
        span = points[first:last + 1]

        if len(span) > 1:
            tan_l, tan_r = corner_tangents(span)
            cache = points_length_cache(span) if config.use_length_cache else None
            count = fit_cubic_to_points(
                span, tan_l, tan_r, error_threshold, clist,
                length_cache=cache, config=config,
            )
            logger.debug("Corner span [%d, %d]: %d segments", first, last, count)
        else:
            # 单点输入
            pt = span[0]
            clist.append(Cubic(pt, pt, pt, pt, orig_span=0))

        corner_index.append(len(clist))

    return corner_index


def fit_curve(
    points,
    error_threshold: float,
    corners=None,
    dims: int | None = None,
    config: FitConfig | None = None,
    calc_orig_index: bool = True,
    calc_corner_index: bool = True,
) -> FitResult:
    """
    将有序采样点拟合为分段三次 Bézier 曲线。

    每对相邻角点之间的区间独立拟合，角点处不保证切线连续。

    Args:
        points: (N, dims) 采样点，或配合 dims 的扁平缓冲区
        error_threshold: 允许的最大偏差 (与坐标同单位)，须为正
        corners: 可选角点索引，严格递增，首为 0，末为 N-1；默认 [0, N-1]
        dims: 扁平缓冲区的点维度
        config: 拟合参数，默认 FitConfig()
        calc_orig_index: 是否输出节点对应的输入点索引
        calc_corner_index: 是否输出角点对应的节点索引

    Returns:
        FitResult, knot_count = 段数 + 1

    Raises:
        InvalidInputError: 输入违反前置条件
        CurveFitResourceError: 内存不足
    """
    points = as_points_array(points, dims)
    error_threshold = validate_error_threshold(error_threshold)
    corners = validate_corners(corners, points)
    if config is None:
        config = FitConfig()

    clist = CubicList(points.shape[1])
    try:
        corner_index = _fit_corner_spans(points, corners, error_threshold, config, clist)
        knots, orig_index = cubic_list_as_array(
            clist, int(corners[-1]), calc_orig_index=calc_orig_index
        )
    except MemoryError as exc:
        raise CurveFitResourceError(
            f"out of memory fitting {len(points)} points of dims={points.shape[1]}"
        ) from exc
    finally:
        clist.clear()

    logger.debug(
        "Fitted %d points (dims=%d) into %d segments", len(points), points.shape[1], len(knots) - 1
    )

    return FitResult(
        knots=knots,
        orig_index=orig_index,
        corner_index=np.array(corner_index, dtype=np.intp) if calc_corner_index else None,
    )


def fit_curve_float32(
    points,
    error_threshold: float,
    corners=None,
    dims: int | None = None,
    config: FitConfig | None = None,
    calc_orig_index: bool = True,
    calc_corner_index: bool = True,
) -> FitResult:
    """
    单精度版本的 fit_curve。

    输入转换为双精度后执行相同算法，节点结果再转换回单精度。
    """
    points_db = np.asarray(points, dtype=np.float32).astype(np.float64)
    result = fit_curve(
        points_db, float(np.float32(error_threshold)), corners, dims, config,
        calc_orig_index, calc_corner_index,
    )
    return result.astype(np.float32)


class CubicCurveFit:
    """
    分段三次 Bézier 拟合曲线。

    全局参数 s 在 [0, segment_count] 上，第 i 段对应 [i, i+1]。

    Attributes:
        points: (N, dims) 采样点
        error_threshold: 误差容差
        corners: 角点索引
        result: 拟合结果
    """

    def __init__(
        self,
        points: np.ndarray,
        error_threshold: float,
        corners=None,
        config: FitConfig | None = None,
    ):
        """
        Args:
            points: (N, dims) 采样点
            error_threshold: 允许的最大偏差
            corners: 可选角点索引
            config: 拟合参数
        """
        self.points = as_points_array(points)
        self.error_threshold = error_threshold
        self.corners = corners
        self.config = config if config is not None else FitConfig()

        self.result: FitResult | None = None
        self._bpoly: BPoly | None = None

    def fit(self):
        """执行拟合。返回 self 以支持链式调用。"""
        self.result = fit_curve(self.points, self.error_threshold, self.corners, config=self.config)
        self._bpoly = self.to_bpoly()
        return self

    @property
    def segment_count(self) -> int:
        return 0 if self.result is None else self.result.segment_count

    def to_bpoly(self) -> BPoly:
        """
        转换为 scipy 分段 Bernstein 多项式。

        Returns:
            BPoly 对象，断点为 0, 1, ..., segment_count
        """
        segments = self.result.segments()  # (M, 4, dims)
        c = np.transpose(segments, (1, 0, 2))
        x = np.arange(len(segments) + 1, dtype=np.float64)
        return BPoly(c, x)

    def evaluate(self, s: float) -> np.ndarray:
        """
        在全局参数 s 处求值。

        Args:
            s: 全局参数，超出 [0, segment_count] 时截断

        Returns:
            (dims,) 曲线上的点
        """
        return self._bpoly(np.clip(s, 0.0, self.segment_count))

    def evaluate_batch(self, s_values: np.ndarray) -> np.ndarray:
        """
        批量求值。

        Args:
            s_values: (M,) 全局参数

        Returns:
            (M, dims) 曲线上的点
        """
        s_values = np.clip(np.asarray(s_values, dtype=np.float64), 0.0, self.segment_count)
        return self._bpoly(s_values)

    def sample_uniform(self, num_points: int) -> tuple[np.ndarray, np.ndarray]:
        """
        在全局参数上均匀采样。

        Args:
            num_points: 采样点数

        Returns:
            s_values: (M,) 参数值
            samples: (M, dims) 曲线上的点
        """
        s_values = np.linspace(0.0, self.segment_count, num_points)
        return s_values, self.evaluate_batch(s_values)

    def __repr__(self) -> str:
        status = f"{self.segment_count} segments" if self.result is not None else "not fitted"
        return f"CubicCurveFit(N={len(self.points)}, dims={self.points.shape[1]}, {status})"


if __name__ == "__main__":
    from curve_fit_nd.datasets import hand_drawn_stroke

    points, tolerance = hand_drawn_stroke()

    print("=== 自适应三次 Bézier 拟合测试 ===")
    print(f"输入点数: {len(points)}")

    curve = CubicCurveFit(points, tolerance.error_threshold).fit()
    result = curve.result
    print(f"段数: {result.segment_count}")
    print(f"节点对应输入索引: {result.orig_index}")

    s_samples, samples = curve.sample_uniform(50)
    print(f"均匀采样: {len(samples)} 点")
    print(f"起点误差: {np.linalg.norm(samples[0] - points[0]):.2e}")
    print(f"终点误差: {np.linalg.norm(samples[-1] - points[-1]):.2e}")
