"""
datasets - 示例数据集

包含:
- strokes: 手绘笔画、正方形轮廓、三维螺旋线
"""

from .strokes import StrokeTolerance, hand_drawn_stroke, helix_path, square_outline

__all__ = [
    "StrokeTolerance",
    "hand_drawn_stroke",
    "square_outline",
    "helix_path",
]
