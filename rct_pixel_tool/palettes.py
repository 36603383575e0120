"""
调色板定义与加载
内置 RollerCoaster Tycoon 花卉调色板，并支持从 JSON / CSV 文件加载自定义调色板
"""

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from .color_utils import ColorUtils
from .errors import InvalidInput, MalformedPaletteEntry
from .settings import DEFAULT_PALETTE

logger = logging.getLogger(__name__)


# 从游戏截图中提取的花卉颜色，按原始顺序保存（包含若干位数错误的条目，加载时会被拒绝）
RCT_FLOWER_COLORS = [
    '#172323', '#233333', '#2f4343', '#3f5353', '#4b6363', '#5b7373', '#6f8383',
    '#537b7', '#5b5b13', '#6b6b1f', '#777b2f', '#878b3b', '#979b4f', '#a7af5f',
    '#777777', '#bcbc8b', '#9f9f3a3', '#432b07', '#573b0b', '#6f4b17', '#7b571f',
    '#8f6327', '#9f7333', '#b38343', '#bf9757', '#cbaf6f', '#e7dba3',
    '#7fef3', '#471b00', '#5f2b00', '#773300', '#8f5307', '#a76f07', '#bf8b0f',
    '#cf9f1b', '#e7b72f', '#ff5f', '#ff6f6f', '#ff7f3', '#230000',
    '#4f0000', '#5f0707', '#6f0f0f', '#7f1b1b', '#8f2727', '#9f3333', '#af3f3f',
    '#cf6767', '#df7777', '#ef8787', '#ff9f9f', '#176767', '#275757', '#30527',
    '#476f2b', '#577f33', '#6f8f43', '#7f9f4f', '#8faf5b', '#9fbf67', '#afcf73',
    '#cf8f4f', '#5b7f0', '#9f3f00', '#135300', '#176700', '#1f7b00', '#278f07',
    '#cfaf47', '#8b7f3f', '#7f6343', '#ff5300', '#ff6300', '#3fb06c', '#cf53d',
    '#3f0f0f', '#4b0f0b', '#53b07', '#4b60f73', '#53bf7f', '#af6b3f',
    '#27b2f', '#272b2f', '#373b97', '#5373f', '#733b3f', '#833f6f', '#c2b07f',
    '#2af07', '#2b7b0f', '#371b07', '#472f0f', '#5b3433', '#6b47f3', '#7b5b74',
    '#8b6f8f', '#9b7f8f', '#ab8f9f', '#bfa3b3', '#cfb3c3', '#dfb3d3', '#efc7e3',
    '#5fb33b', '#63b39b', '#77777f', '#8b8b93', '#a3a3a7', '#c7c7c3', '#eeeee3',
    '#003f5f', '#1b2b8b', '#273097', '#00534b', '#005f53', '#005f57', '#00635b',
    '#007b7f', '#007f36', '#249f93', '#359f9f', '#53afaf', '#67bfbf', '#7bcfcf',
    '#8fdfdf', '#a3efef', '#b7ffff', '#000000',
]

RAW_PALETTES: Dict[str, List[dict]] = {
    'rct_flower': [{'color': c} for c in RCT_FLOWER_COLORS],
}


@dataclass(frozen=True)
class PaletteEntry:
    """调色板条目：规范化颜色 + 可选显示名称"""

    color: str
    name: Optional[str] = None
    rgb: Tuple[int, int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'rgb', ColorUtils.hex_to_rgb(self.color))

    @property
    def display_name(self) -> str:
        return self.name or self.color


@dataclass(frozen=True, eq=False)
class Palette:
    """
    不可变的调色板

    entries 保持原始表顺序（最近颜色查找的平局规则依赖该顺序）。
    rejected 记录加载时被拒绝的 (序号, 原始值)。
    """

    palette_id: str
    entries: Tuple[PaletteEntry, ...]
    rejected: Tuple[Tuple[int, object], ...] = ()
    names: Mapping[str, str] = field(init=False, repr=False)
    colors: Tuple[str, ...] = field(init=False, repr=False)
    rgb_array: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if not self.entries:
            raise MalformedPaletteEntry(None, self.palette_id, "palette has no valid entries")

        # 重复颜色时以最后一个有名称的条目为准
        names = {e.color: e.name for e in self.entries if e.name}
        rgb_array = np.array([e.rgb for e in self.entries], dtype=np.int32)
        rgb_array.setflags(write=False)

        object.__setattr__(self, 'entries', tuple(self.entries))
        object.__setattr__(self, 'rejected', tuple(self.rejected))
        object.__setattr__(self, 'names', MappingProxyType(names))
        object.__setattr__(self, 'colors', tuple(e.color for e in self.entries))
        object.__setattr__(self, 'rgb_array', rgb_array)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self.entries)

    def __contains__(self, color) -> bool:
        try:
            return ColorUtils.normalize_hex(color) in self.colors
        except ValueError:
            return False

    def display_name(self, color: str) -> str:
        """颜色的显示名称，没有名称时回退为颜色本身的十六进制字符串"""
        return self.names.get(color, color)


def load_palette(raw_entries, palette_id: str = "custom", strict: bool = True) -> Palette:
    """
    校验并加载调色板数据

    Args:
        raw_entries: 由 {'color': ..., 'name': ...} 字典或十六进制字符串组成的列表
        palette_id: 调色板名称
        strict: True 时遇到无效条目立即抛出 MalformedPaletteEntry；
                False 时跳过无效条目并记录到 Palette.rejected

    Returns:
        Palette 对象
    """
    entries = []
    rejected = []
    for index, item in enumerate(raw_entries):
        if isinstance(item, dict):
            raw_color = item.get('color')
            name = item.get('name') or None
        else:
            raw_color, name = item, None

        try:
            color = ColorUtils.normalize_hex(raw_color)
        except ValueError as e:
            if strict:
                raise MalformedPaletteEntry(index, raw_color) from e
            rejected.append((index, raw_color))
            continue

        entries.append(PaletteEntry(color=color, name=str(name) if name is not None else None))

    if rejected:
        logger.warning(
            "Palette %r: rejected %d malformed entries: %s",
            palette_id, len(rejected), ", ".join(f"#{i}={v!r}" for i, v in rejected),
        )

    return Palette(palette_id=palette_id, entries=tuple(entries), rejected=tuple(rejected))


def load_palette_file(source, palette_id: Optional[str] = None, strict: bool = True) -> Palette:
    """
    从 JSON 或 CSV 文件加载调色板

    JSON: 颜色字符串列表，或 {'color', 'name'} 对象列表（也可包在 {"colors": [...]} 中）
    CSV: 需要 color 列，name 列可选

    Args:
        source: 文件路径，或带有 name / read() 的文件对象（如 Streamlit 上传文件）
        palette_id: 调色板名称，默认取文件名
        strict: 见 load_palette
    """
    if hasattr(source, 'read'):
        file_name = getattr(source, 'name', '') or ''
        data = source.getvalue() if hasattr(source, 'getvalue') else source.read()
    else:
        file_name = str(source)
        data = Path(source).read_bytes()

    if isinstance(data, bytes):
        data = data.decode('utf-8-sig')

    suffix = Path(file_name).suffix.lower()
    palette_id = palette_id or Path(file_name).stem or "custom"

    if suffix == '.json':
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Palette file {file_name!r} is not valid JSON: {e}") from e
        if isinstance(parsed, dict):
            parsed = parsed.get('colors', [])
        if not isinstance(parsed, list):
            raise InvalidInput(f"Palette file {file_name!r} must contain a list of colors")
        raw_entries = parsed
    elif suffix == '.csv':
        reader = csv.DictReader(io.StringIO(data))
        fields = [f.strip().lower() for f in (reader.fieldnames or [])]
        if 'color' not in fields:
            raise InvalidInput(f"Palette file {file_name!r} needs a 'color' column")
        raw_entries = [
            {k.strip().lower(): (v or '').strip() for k, v in row.items() if k is not None}
            for row in reader
        ]
    else:
        raise InvalidInput(f"Unsupported palette file type: {suffix or file_name!r}")

    return load_palette(raw_entries, palette_id=palette_id, strict=strict)


# 内置调色板在导入时加载一次，之后不再修改
ALL_PALETTES: Mapping[str, Palette] = MappingProxyType({
    name: load_palette(raw, palette_id=name, strict=False)
    for name, raw in RAW_PALETTES.items()
})


def get_palette(palette_name: str = DEFAULT_PALETTE) -> Palette:
    """获取指定名称的内置调色板"""
    palette = ALL_PALETTES.get(palette_name)
    if palette is None:
        raise ValueError(f"Unknown palette: {palette_name}")
    return palette


def get_all_palettes() -> List[str]:
    """获取所有内置调色板名称"""
    return list(ALL_PALETTES.keys())
