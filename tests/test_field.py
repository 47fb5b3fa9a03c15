"""Tests for ^GF graphic field assembly."""

import re

import pytest
from PIL import Image

from zplgfa.encoding.field import (
    AsciiRowRenderer,
    BinaryRowRenderer,
    CompressedAsciiRowRenderer,
    build_graphic_field,
    convert_to_graphic_field,
    get_row_renderer,
)
from zplgfa.errors import InvalidInputError
from zplgfa.models import GraphicType

HEADER = re.compile(rb"^\^GF([AB]),(\d+),(\d+),(\d+),\n")


def _split(field: bytes) -> tuple[tuple[bytes, int, int, int], bytes]:
    match = HEADER.match(field)
    assert match is not None
    tag, data_bytes, total_bytes, row_bytes = match.groups()
    return (tag, int(data_bytes), int(total_bytes), int(row_bytes)), field[match.end() :]


class TestRowRenderers:
    def test_get_row_renderer(self):
        assert isinstance(get_row_renderer(GraphicType.ASCII), AsciiRowRenderer)
        assert isinstance(get_row_renderer(GraphicType.BINARY), BinaryRowRenderer)
        assert isinstance(get_row_renderer(GraphicType.COMPRESSED_ASCII), CompressedAsciiRowRenderer)

    def test_ascii_row(self):
        assert AsciiRowRenderer().render(b"\x0f\xa0") == b"0FA0\n"

    def test_binary_row(self):
        assert BinaryRowRenderer().render(b"\x0f\xa0") == b"\x0f\xa0"

    def test_compressed_dedup_only_identical_rows(self):
        renderer = CompressedAsciiRowRenderer()
        rendered = [renderer.render(row) for row in (b"\x00", b"\xff", b"\xff", b"\x00", b"\xff")]
        assert rendered == [b",", b"!", b":", b",", b"!"]

    def test_compressed_first_row_never_deduplicated(self):
        assert CompressedAsciiRowRenderer().render(b"\x00") == b","


class TestConvertToGraphicField:
    """Tests for converting images to ^GF fields."""

    def test_white_16x8_ascii(self, white_image):
        field = convert_to_graphic_field(white_image, GraphicType.ASCII)
        assert field == b"^GFA,40,16,2,\n" + b"0000\n" * 8

    def test_white_16x8_compressed(self, white_image):
        field = convert_to_graphic_field(white_image, GraphicType.COMPRESSED_ASCII)
        assert field == b"^GFA,8,16,2,\n,:::::::"

    def test_black_16x8_binary(self, black_image):
        field = convert_to_graphic_field(black_image, GraphicType.BINARY)
        assert field == b"^GFB,16,16,2,\n" + b"\xff" * 16

    def test_compressed_rows_in_order(self, striped_image):
        field = convert_to_graphic_field(striped_image, GraphicType.COMPRESSED_ASCII)
        assert field == b"^GFA,3,3,1,\n,!:"

    def test_non_byte_aligned_width(self):
        image = Image.new("1", (10, 4), color=1)
        image.load()[9, 0] = 0

        field = convert_to_graphic_field(image, GraphicType.ASCII)

        assert field.startswith(b"^GFA,20,8,2,\n0040\n0000\n")

    @pytest.mark.parametrize("graphic_type", list(GraphicType))
    def test_header_length_matches_data(self, graphic_type):
        image = Image.new("RGB", (37, 23), color="white")
        pixels = image.load()
        for y in range(23):
            for x in range(0, 37, (y % 5) + 1):
                pixels[x, y] = (0, 0, 0)

        header, data = _split(convert_to_graphic_field(image, graphic_type))
        tag, data_bytes, total_bytes, row_bytes = header

        assert tag == graphic_type.field_tag.encode()
        assert data_bytes == len(data)
        assert row_bytes == 5
        assert total_bytes == 5 * 23

    def test_conversions_do_not_share_state(self, white_image):
        first = convert_to_graphic_field(white_image, GraphicType.COMPRESSED_ASCII)
        second = convert_to_graphic_field(white_image, GraphicType.COMPRESSED_ASCII)
        assert first == second

    def test_accepts_graphic_type_name(self, white_image):
        field = convert_to_graphic_field(white_image, "ascii")
        assert field.startswith(b"^GFA,40,")

    def test_empty_image_raises(self):
        with pytest.raises(InvalidInputError):
            convert_to_graphic_field(Image.new("RGB", (0, 0)), GraphicType.ASCII)


class TestBuildGraphicField:
    def test_no_rows(self):
        assert build_graphic_field([], 2, GraphicType.ASCII) == b"^GFA,0,0,2,\n"
