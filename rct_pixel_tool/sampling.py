"""
采样网格计算
根据源图尺寸和单元尺寸计算缩放比例、渲染尺寸、网格尺寸以及每个单元的采样点
"""

import math
from dataclasses import dataclass
from numbers import Integral
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidInput
from .settings import MAX_DIMENSION


@dataclass(frozen=True)
class SamplingGrid:
    """一次转换请求的采样网格（每次请求重新计算）"""

    scale: float
    render_width: int
    render_height: int
    cell_size: int
    grid_width: int
    grid_height: int

    @property
    def is_empty(self) -> bool:
        return self.grid_width == 0 or self.grid_height == 0

    @property
    def output_size(self) -> Tuple[int, int]:
        """输出位图尺寸 (宽, 高)"""
        return self.grid_width * self.cell_size, self.grid_height * self.cell_size

    def sample_point(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """
        单元 (x, y) 的采样点：单元中心，而非左上角

        Returns:
            渲染图中的 (sample_x, sample_y)；越出渲染范围时返回 None
        """
        sample_x = x * self.cell_size + self.cell_size // 2
        sample_y = y * self.cell_size + self.cell_size // 2
        if sample_x < self.render_width and sample_y < self.render_height:
            return sample_x, sample_y
        return None

    def sample_coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """所有单元的采样列坐标与行坐标（分别长 grid_width / grid_height）"""
        half = self.cell_size // 2
        xs = np.arange(self.grid_width, dtype=np.intp) * self.cell_size + half
        ys = np.arange(self.grid_height, dtype=np.intp) * self.cell_size + half
        return xs, ys


def require_positive_int(value, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidInput(f"{label} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidInput(f"{label} must be positive, got {value}")
    return int(value)


def build_sampling_grid(src_width: int, src_height: int,
                        max_dimension: int = MAX_DIMENSION,
                        cell_size: int = 8) -> SamplingGrid:
    """
    计算采样网格

    源图小于 max_dimension 时 scale 会大于 1（即放大），保持原有行为。

    Args:
        src_width: 源图宽度
        src_height: 源图高度
        max_dimension: 渲染图最长边上限
        cell_size: 单元边长（像素）

    Returns:
        SamplingGrid
    """
    cell_size = require_positive_int(cell_size, "cell_size")
    src_width = require_positive_int(src_width, "source width")
    src_height = require_positive_int(src_height, "source height")
    max_dimension = require_positive_int(max_dimension, "max_dimension")

    scale = min(max_dimension / src_width, max_dimension / src_height)
    render_width = math.floor(src_width * scale)
    render_height = math.floor(src_height * scale)

    return SamplingGrid(
        scale=scale,
        render_width=render_width,
        render_height=render_height,
        cell_size=cell_size,
        grid_width=render_width // cell_size,
        grid_height=render_height // cell_size,
    )
