"""
搭建指南统计
按行统计颜色网格中每种颜色出现的次数，并附上调色板中的显示名称
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .color_utils import as_palette


@dataclass(frozen=True)
class ColorCount:
    color: str
    name: str
    count: int


@dataclass(frozen=True)
class RowSummary:
    """一行的颜色统计，条目按颜色首次出现的顺序排列"""

    row_index: int
    width: int
    entries: Tuple[ColorCount, ...]

    @property
    def counts(self) -> Dict[str, int]:
        return {e.color: e.count for e in self.entries}

    @property
    def row_number(self) -> int:
        """从 1 开始的行号，用于显示"""
        return self.row_index + 1


def summarize_row(row: Sequence[str], row_index: int = 0, palette=None) -> RowSummary:
    palette = as_palette(palette)
    counter = Counter(row)
    return RowSummary(
        row_index=row_index,
        width=len(row),
        entries=tuple(
            ColorCount(color=color, name=palette.display_name(color), count=count)
            for color, count in counter.items()
        ),
    )


def summarize(color_grid: Sequence[Sequence[str]], palette=None) -> List[RowSummary]:
    """
    生成逐行搭建指南

    各行独立统计，不做跨行汇总。

    Args:
        color_grid: 按行排列的颜色网格
        palette: 用于查找显示名称的调色板

    Returns:
        每行一个 RowSummary，顺序与网格行顺序一致
    """
    palette = as_palette(palette)
    return [summarize_row(row, y, palette) for y, row in enumerate(color_grid)]


def color_statistics(color_grid: Sequence[Sequence[str]]) -> Dict[str, int]:
    """
    获取整张图的颜色统计

    Returns:
        颜色到单元数量的映射，按数量从多到少排列
    """
    counter = Counter(color for row in color_grid for color in row)
    return dict(counter.most_common())
