"""
图像处理核心
实现图像解码、缩放、网格采样、颜色量化和像素块绘制
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .color_utils import ColorUtils, as_palette
from .errors import DegenerateGrid, InvalidInput
from .palettes import Palette
from .sampling import SamplingGrid, build_sampling_grid, require_positive_int
from .settings import DEFAULT_PALETTE, FALLBACK_COLOR, MAX_DIMENSION

logger = logging.getLogger(__name__)

ColorGrid = Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class SourceImage:
    """解码后的源图：(高, 宽, 4) 的 RGBA uint8 数组，只读"""

    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.array(self.pixels, dtype=np.uint8, order='C')
        pixels.setflags(write=False)
        object.__setattr__(self, 'pixels', pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]


@dataclass(frozen=True)
class ConversionResult:
    """一次转换的输出：像素画位图 + 按行排列的颜色网格"""

    image: Image.Image
    color_grid: ColorGrid
    grid: SamplingGrid
    palette: Palette

    @property
    def palette_id(self) -> str:
        return self.palette.palette_id

    @property
    def is_empty(self) -> bool:
        return self.grid.is_empty


def decode_image(data: Union[bytes, str, Path, io.IOBase]) -> SourceImage:
    """
    解码图像文件

    Args:
        data: 图像字节、文件路径或文件对象

    Returns:
        SourceImage（多帧图像只取第一帧）
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = io.BytesIO(bytes(data))

    try:
        with Image.open(data) as image:
            image.seek(0)
            rgba = image.convert('RGBA')
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise InvalidInput(f"Not a readable image: {e}") from e

    logger.debug("Decoded image %dx%d", rgba.width, rgba.height)
    return SourceImage(np.array(rgba))


def source_from_array(image_array: np.ndarray) -> SourceImage:
    """
    从 numpy 数组构造源图

    Args:
        image_array: (高, 宽, 3) 的 RGB 或 (高, 宽, 4) 的 RGBA 数组
    """
    image_array = np.asarray(image_array)
    if image_array.ndim != 3 or image_array.shape[2] not in (3, 4):
        raise InvalidInput(f"Image array must be RGB or RGBA, got shape {image_array.shape}")

    if image_array.shape[2] == 3:
        # 添加alpha通道
        alpha = np.full(image_array.shape[:2] + (1,), 255, dtype=np.uint8)
        image_array = np.concatenate([image_array.astype(np.uint8), alpha], axis=2)

    return SourceImage(image_array)


def _as_source(image) -> SourceImage:
    if isinstance(image, SourceImage):
        return image
    if isinstance(image, Image.Image):
        return SourceImage(np.array(image.convert('RGBA')))
    if isinstance(image, np.ndarray):
        return source_from_array(image)
    return decode_image(image)


def render_source(source: SourceImage, width: int, height: int) -> np.ndarray:
    """
    将源图缩放到渲染尺寸

    缩小时使用 INTER_AREA，放大时使用 INTER_LINEAR。
    """
    if (width, height) == (source.width, source.height):
        return source.pixels
    shrinking = width < source.width or height < source.height
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
    return cv2.resize(source.pixels.copy(), (width, height), interpolation=interpolation)


def _visible_rgb(rgba: np.ndarray) -> np.ndarray:
    """取出RGB通道；完全透明的像素读作黑色，半透明像素保留原始RGB"""
    rgb = rgba[..., :3].astype(np.int32)
    rgb[rgba[..., 3] == 0] = 0
    return rgb


def convert(source, cell_size: int, palette: Union[Palette, str, None] = None,
            max_dimension: int = MAX_DIMENSION, allow_empty: bool = True) -> ConversionResult:
    """
    将图像转换为限定调色板的像素画

    纯函数：不保留任何调用间的状态。

    Args:
        source: SourceImage、PIL 图像、numpy 数组、图像字节或路径
        cell_size: 单元边长（像素），必须为正整数
        palette: Palette 对象或内置调色板名称
        max_dimension: 渲染图最长边上限
        allow_empty: False 时网格为空会抛出 DegenerateGrid

    Returns:
        ConversionResult
    """
    cell_size = require_positive_int(cell_size, "cell_size")
    palette = as_palette(palette)
    source = _as_source(source)
    grid = build_sampling_grid(source.width, source.height, max_dimension, cell_size)

    logger.info(
        "Converting %dx%d image: render %dx%d, grid %dx%d, cell %d",
        source.width, source.height, grid.render_width, grid.render_height,
        grid.grid_width, grid.grid_height, grid.cell_size,
    )

    if grid.is_empty:
        logger.warning(
            "Empty grid for cell size %d (render %dx%d)",
            grid.cell_size, grid.render_width, grid.render_height,
        )
        if not allow_empty:
            raise DegenerateGrid(
                (grid.render_width, grid.render_height), (grid.grid_width, grid.grid_height)
            )
        return ConversionResult(
            image=Image.new('RGBA', (0, 0)),
            color_grid=(),
            grid=grid,
            palette=palette,
        )

    rendered = render_source(source, grid.render_width, grid.render_height)

    # 采样点越界的单元使用后备颜色
    xs, ys = grid.sample_coordinates()
    in_x = xs < grid.render_width
    in_y = ys < grid.render_height
    samples = _visible_rgb(
        rendered[np.ix_(np.minimum(ys, grid.render_height - 1), np.minimum(xs, grid.render_width - 1))]
    )

    colors = np.asarray(palette.colors, dtype=object)
    resolved = colors[ColorUtils.closest_indices(samples, palette)]
    resolved[~(in_y[:, np.newaxis] & in_x[np.newaxis, :])] = FALLBACK_COLOR

    color_grid = tuple(tuple(row) for row in resolved.tolist())
    return ConversionResult(
        image=paint_blocks(color_grid, grid.cell_size),
        color_grid=color_grid,
        grid=grid,
        palette=palette,
    )


def paint_blocks(color_grid: ColorGrid, cell_size: int) -> Image.Image:
    """
    按颜色网格绘制像素画：每个单元是 cell_size × cell_size 的不透明色块
    """
    grid_height = len(color_grid)
    grid_width = len(color_grid[0]) if grid_height else 0

    cells = np.zeros((grid_height, grid_width, 4), dtype=np.uint8)
    cells[..., 3] = 255
    for y, row in enumerate(color_grid):
        for x, color in enumerate(row):
            cells[y, x, :3] = ColorUtils.hex_to_rgb(color)

    blocks = np.repeat(np.repeat(cells, cell_size, axis=0), cell_size, axis=1)
    return Image.fromarray(blocks, 'RGBA')


class ImageProcessor:
    """
    图像处理器

    保存调色板和渲染尺寸设置；convert 每次调用都是独立的，不修改处理器状态。
    """

    def __init__(self, palette_name: Union[Palette, str] = DEFAULT_PALETTE,
                 max_dimension: int = MAX_DIMENSION):
        """
        初始化图像处理器

        Args:
            palette_name: 调色板名称或 Palette 对象，默认为 "rct_flower"
            max_dimension: 渲染图最长边上限
        """
        self.palette = as_palette(palette_name)
        self.max_dimension = max_dimension

    def convert(self, image, cell_size: int, allow_empty: bool = True) -> ConversionResult:
        return convert(image, cell_size, self.palette,
                       max_dimension=self.max_dimension, allow_empty=allow_empty)

    def load_image(self, image_path: Union[str, Path]) -> SourceImage:
        """加载图像文件"""
        return decode_image(Path(image_path))

    @property
    def palette_name(self) -> str:
        return self.palette.palette_id

    def get_grid(self, image_size: Tuple[int, int], cell_size: int) -> Optional[SamplingGrid]:
        """预览给定图像尺寸下的网格，不做转换"""
        width, height = image_size
        return build_sampling_grid(width, height, self.max_dimension, cell_size)
