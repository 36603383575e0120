"""
RCT Flower Pixel Art Tool

把照片转换为只使用 RollerCoaster Tycoon 花卉颜色的像素画，并生成逐行搭建指南。
"""

import logging

__version__ = "1.0.0"
__author__ = "RCT Pixel Art Tool Team"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import PixelArtError, InvalidInput, DegenerateGrid, MalformedPaletteEntry  # noqa: E402
from .palettes import (  # noqa: E402
    ALL_PALETTES,
    Palette,
    PaletteEntry,
    get_palette,
    get_all_palettes,
    load_palette,
    load_palette_file,
)
from .color_utils import ColorUtils, distance, resolve, resolve_many  # noqa: E402
from .sampling import SamplingGrid, build_sampling_grid  # noqa: E402
from .image_processor import (  # noqa: E402
    ConversionResult,
    ImageProcessor,
    SourceImage,
    convert,
    decode_image,
    source_from_array,
)
from .build_guide import ColorCount, RowSummary, color_statistics, summarize  # noqa: E402
from .exporter import PatternExporter  # noqa: E402
from .session import ResultSlot  # noqa: E402


def get_palette_names():
    """获取所有调色板名称"""
    return get_all_palettes()


__all__ = [
    'ALL_PALETTES',
    'Palette',
    'PaletteEntry',
    'get_palette',
    'get_all_palettes',
    'get_palette_names',
    'load_palette',
    'load_palette_file',
    'ColorUtils',
    'distance',
    'resolve',
    'resolve_many',
    'SamplingGrid',
    'build_sampling_grid',
    'ConversionResult',
    'ImageProcessor',
    'SourceImage',
    'convert',
    'decode_image',
    'source_from_array',
    'ColorCount',
    'RowSummary',
    'color_statistics',
    'summarize',
    'PatternExporter',
    'ResultSlot',
    'PixelArtError',
    'InvalidInput',
    'DegenerateGrid',
    'MalformedPaletteEntry',
]
