"""Tests for rct_pixel_tool.image_processor — decode, convert and paint."""

import io

import numpy as np
import pytest
from PIL import Image

from rct_pixel_tool.build_guide import summarize
from rct_pixel_tool.errors import DegenerateGrid, InvalidInput
from rct_pixel_tool.image_processor import (
    ImageProcessor,
    SourceImage,
    convert,
    decode_image,
    paint_blocks,
    source_from_array,
)
from rct_pixel_tool.palettes import get_palette


def _png_bytes(arr: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(arr, 'RGBA').save(buffer, format='PNG')
    return buffer.getvalue()


class TestDecode:
    def test_png_bytes(self, solid):
        source = decode_image(_png_bytes(solid(30, 20, (1, 2, 3))))
        assert (source.width, source.height) == (30, 20)
        assert source.pixels.shape == (20, 30, 4)
        assert tuple(source.pixels[0, 0]) == (1, 2, 3, 255)

    def test_path(self, tmp_path, solid):
        path = tmp_path / 'photo.png'
        path.write_bytes(_png_bytes(solid(8, 8, (9, 9, 9))))
        assert decode_image(path).width == 8

    def test_rgb_jpeg_gets_alpha(self):
        buffer = io.BytesIO()
        Image.new('RGB', (16, 12), (200, 100, 50)).save(buffer, format='JPEG')
        source = decode_image(buffer.getvalue())
        assert source.pixels.shape == (12, 16, 4)
        assert (source.pixels[..., 3] == 255).all()

    def test_not_an_image(self):
        with pytest.raises(InvalidInput):
            decode_image(b'definitely not an image')

    def test_oversized_image_is_invalid_input(self, monkeypatch, solid):
        data = _png_bytes(solid(200, 200, (5, 5, 5)))
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 1000)
        with pytest.raises(InvalidInput, match="Not a readable image"):
            decode_image(data)

    def test_missing_file_is_invalid_input(self, tmp_path):
        with pytest.raises(InvalidInput):
            decode_image(tmp_path / 'missing.png')

    def test_source_is_read_only(self, solid):
        source = source_from_array(solid(4, 4, (0, 0, 0)))
        with pytest.raises(ValueError):
            source.pixels[0, 0, 0] = 1


class TestSourceFromArray:
    def test_rgb_array(self):
        source = source_from_array(np.full((5, 7, 3), 10, dtype=np.uint8))
        assert isinstance(source, SourceImage)
        assert source.pixels.shape == (5, 7, 4)
        assert (source.pixels[..., 3] == 255).all()

    def test_bad_shape(self):
        with pytest.raises(InvalidInput):
            source_from_array(np.zeros((5, 7), dtype=np.uint8))


class TestConvert:
    def test_solid_first_palette_colour(self, solid):
        palette = get_palette('rct_flower')
        first = palette.colors[0]
        result = convert(solid(800, 400, (0x17, 0x23, 0x23)), 8, palette)

        assert len(result.color_grid) == 25
        assert all(len(row) == 50 for row in result.color_grid)
        assert all(color == first for row in result.color_grid for color in row)

        for summary in summarize(result.color_grid, palette):
            assert len(summary.entries) == 1
            assert summary.entries[0].color == first
            assert summary.entries[0].count == 50

    @pytest.mark.parametrize('cell_size', [4, 7, 13, 20])
    def test_solid_any_cell_size(self, solid, cell_size):
        result = convert(solid(800, 400, (0x17, 0x23, 0x23)), cell_size)
        expected_width = 400 // cell_size
        assert len(result.color_grid) == 200 // cell_size
        assert all(row == ('#172323',) * expected_width for row in result.color_grid)

    def test_bitmap_size_and_blocks(self, solid, primary_palette, half_red_half_white):
        result = convert(half_red_half_white, 8, primary_palette)
        assert result.image.mode == 'RGBA'
        assert result.image.size == (400, 200)
        assert result.image.getpixel((0, 0)) == (255, 0, 0, 255)
        assert result.image.getpixel((7, 7)) == (255, 0, 0, 255)
        assert result.image.getpixel((399, 199)) == (255, 255, 255, 255)

    def test_two_colour_rows(self, primary_palette, half_red_half_white):
        result = convert(half_red_half_white, 8, primary_palette)
        for row in result.color_grid:
            assert row[:25] == ('#ff0000',) * 25
            assert row[25:] == ('#ffffff',) * 25

    def test_upscales_small_source(self, solid, primary_palette):
        result = convert(solid(100, 50, (250, 250, 250)), 10, primary_palette)
        assert (result.grid.render_width, result.grid.render_height) == (400, 200)
        assert len(result.color_grid) == 20
        assert len(result.color_grid[0]) == 40

    def test_transparent_pixels_read_as_black(self, solid, primary_palette):
        result = convert(solid(64, 64, (255, 255, 255), alpha=0), 8, primary_palette)
        assert all(color == '#000000' for row in result.color_grid for color in row)

    def test_partly_transparent_pixels_keep_their_colour(self, solid, primary_palette):
        result = convert(solid(64, 64, (255, 255, 255), alpha=100), 8, primary_palette)
        assert all(color == '#ffffff' for row in result.color_grid for color in row)

    def test_only_fully_transparent_cells_turn_black(self, primary_palette):
        arr = np.zeros((64, 64, 4), dtype=np.uint8)
        arr[..., :3] = (255, 0, 0)
        arr[:, :32, 3] = 0
        arr[:, 32:, 3] = 1
        result = convert(arr, 8, primary_palette)
        for row in result.color_grid:
            assert row[:25] == ('#000000',) * 25
            assert row[-24:] == ('#ff0000',) * 24

    def test_accepts_pil_image_and_bytes(self, solid, primary_palette):
        arr = solid(40, 40, (255, 0, 0))
        from_pil = convert(Image.fromarray(arr, 'RGBA'), 8, primary_palette)
        from_bytes = convert(_png_bytes(arr), 8, primary_palette)
        assert from_pil.color_grid == from_bytes.color_grid

    def test_grid_is_immutable(self, solid):
        result = convert(solid(64, 64, (0, 0, 0)), 8)
        assert isinstance(result.color_grid, tuple)
        assert isinstance(result.color_grid[0], tuple)

    def test_repeatable(self, half_red_half_white, primary_palette):
        first = convert(half_red_half_white, 6, primary_palette)
        second = convert(half_red_half_white, 6, primary_palette)
        assert first.color_grid == second.color_grid

    def test_default_palette(self, solid):
        result = convert(solid(32, 32, (0, 0, 0)), 8)
        assert result.palette_id == 'rct_flower'
        assert result.color_grid[0][0] == '#000000'

    @pytest.mark.parametrize('cell_size', [0, -4])
    def test_invalid_cell_size(self, solid, cell_size):
        with pytest.raises(InvalidInput):
            convert(solid(32, 32, (0, 0, 0)), cell_size)

    def test_invalid_cell_size_checked_before_decoding(self):
        with pytest.raises(InvalidInput, match="cell_size"):
            convert(b"not an image", 0)

    def test_degenerate_grid_is_empty_result(self, solid):
        result = convert(solid(800, 400, (0, 0, 0)), 300)
        assert result.is_empty
        assert result.color_grid == ()
        assert result.image.size == (0, 0)
        assert summarize(result.color_grid) == []

    def test_degenerate_grid_can_raise(self, solid):
        with pytest.raises(DegenerateGrid):
            convert(solid(800, 400, (0, 0, 0)), 300, allow_empty=False)


class TestPaintBlocks:
    def test_block_layout(self):
        image = paint_blocks((('#ff0000', '#00ff00'), ('#0000ff', '#000000')), 3)
        assert image.size == (6, 6)
        assert image.getpixel((2, 2)) == (255, 0, 0, 255)
        assert image.getpixel((3, 0)) == (0, 255, 0, 255)
        assert image.getpixel((0, 3)) == (0, 0, 255, 255)
        assert image.getpixel((5, 5)) == (0, 0, 0, 255)


class TestImageProcessor:
    def test_convert_delegates(self, solid):
        processor = ImageProcessor('rct_flower', max_dimension=200)
        result = processor.convert(solid(800, 400, (0x17, 0x23, 0x23)), 10)
        assert (result.grid.render_width, result.grid.render_height) == (200, 100)
        assert processor.palette_name == 'rct_flower'

    def test_load_image(self, tmp_path, solid):
        path = tmp_path / 'a.png'
        path.write_bytes(_png_bytes(solid(12, 6, (1, 1, 1))))
        assert ImageProcessor().load_image(str(path)).height == 6

    def test_get_grid(self):
        grid = ImageProcessor().get_grid((800, 400), 8)
        assert (grid.grid_width, grid.grid_height) == (50, 25)
