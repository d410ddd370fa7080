"""
strokes - 曲线拟合示例数据

包含:
- hand_drawn_stroke: 手绘 "S" 形笔画的二维采样点 (带轻微抖动)
- square_outline: 带四个角点的正方形轮廓
- helix_path: 三维螺旋线采样
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class StrokeTolerance:
    """手绘笔画拟合容差"""

    error_threshold: float = 0.25  # 允许的最大偏差 (mm)


# 手绘 "S" 形笔画采样点 (mm)，按书写顺序排列
# 格式: [x, y]
_RAW_STROKE = np.array(
    [
        [12.0, 18.1],
        [10.9, 19.0],
        [9.4, 19.6],
        [7.8, 19.8],
        [6.1, 19.5],
        [4.7, 18.7],
        [3.8, 17.5],
        [3.5, 16.1],
        [3.9, 14.7],
        [4.9, 13.6],
        [6.3, 12.8],
        [7.9, 12.1],
        [9.4, 11.3],
        [10.8, 10.4],
        [11.8, 9.2],
        [12.2, 7.8],
        [12.0, 6.3],
        [11.2, 5.0],
        [9.9, 4.1],
        [8.3, 3.6],
        [6.6, 3.6],
        [5.0, 4.1],
        [3.7, 5.0],
        [2.9, 6.0],
    ],
    dtype=np.float64,
)


def hand_drawn_stroke() -> tuple[np.ndarray, StrokeTolerance]:
    """
    获取手绘 "S" 形笔画数据。

    Returns:
        points: (N, 2) 采样点 (mm)
        tolerance: 拟合容差
    """
    return _RAW_STROKE.copy(), StrokeTolerance()


def square_outline(samples_per_side: int = 5, size: float = 10.0) -> tuple[np.ndarray, np.ndarray]:
    """
    生成闭合正方形轮廓，四个顶点作为角点。

    Args:
        samples_per_side: 每条边的采样区间数
        size: 边长

    Returns:
        points: (4 * samples_per_side + 1, 2) 采样点，首尾重合
        corners: (5,) 角点索引
    """
    if samples_per_side < 1:
        raise ValueError(f"samples_per_side must be >= 1, got {samples_per_side}")

    vertices = np.array([[0.0, 0.0], [size, 0.0], [size, size], [0.0, size], [0.0, 0.0]])
    t = np.linspace(0.0, 1.0, samples_per_side, endpoint=False)[:, np.newaxis]

    sides = [a + (b - a) * t for a, b in zip(vertices[:-1], vertices[1:])]
    points = np.vstack(sides + [vertices[-1:]])
    corners = np.arange(5) * samples_per_side
    return points, corners


def helix_path(num_points: int = 60, radius: float = 5.0, pitch: float = 2.0, turns: float = 2.0) -> np.ndarray:
    """
    生成三维螺旋线采样点。

    Args:
        num_points: 采样点数
        radius: 螺旋半径
        pitch: 每圈上升高度
        turns: 圈数

    Returns:
        (num_points, 3) 采样点
    """
    theta = np.linspace(0.0, 2.0 * np.pi * turns, num_points)
    return np.column_stack(
        [radius * np.cos(theta), radius * np.sin(theta), pitch * theta / (2.0 * np.pi)]
    )


if __name__ == "__main__":
    points, tolerance = hand_drawn_stroke()
    print("=== 手绘笔画 ===")
    print(f"点数: {len(points)}")
    print(f"范围: X[{points[:, 0].min():.1f}, {points[:, 0].max():.1f}] mm")
    print(f"      Y[{points[:, 1].min():.1f}, {points[:, 1].max():.1f}] mm")
    print(f"容差: {tolerance.error_threshold} mm")

    square, corners = square_outline()
    print(f"\n正方形轮廓: {len(square)} 点, 角点 {corners}")
