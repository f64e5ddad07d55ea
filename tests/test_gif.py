import io

import pytest
from PIL import Image

from gifblocks.enum import Compliant, DisposalMethod, ErrorState
from gifblocks.exceptions import FormatException, MagicException
from gifblocks.extensions import GraphicControlExtension, NetscapeExtension
from gifblocks.gif import GifFile, ImageDescriptor, LogicalScreenDescriptor, color_table_length, set_loop_count


def test_color_table_length():
    assert color_table_length(0) == 6
    assert color_table_length(7) == 768


def test_logical_screen_descriptor():
    screen = LogicalScreenDescriptor(stream=b'\x0a\x00\x14\x00\xf2\x01\x00')

    assert screen.width == 10
    assert screen.height == 20
    assert screen.has_global_color_table
    assert screen.color_resolution == 7
    assert not screen.sorted
    assert screen.global_color_table_size == 2
    assert screen.global_color_table_length == 24
    assert screen.background_color_index == 1
    assert screen.raw == b'\x0a\x00\x14\x00\xf2\x01\x00'


def test_gif_file(simple_gif):
    gif = GifFile(simple_gif)

    assert gif.ok, gif.errors
    assert gif.header.version == b'89a'
    assert gif.width == 2
    assert gif.height == 2
    assert len(gif.global_color_table) == 6

    assert [type(_) for _ in gif.blocks] == [NetscapeExtension, GraphicControlExtension, ImageDescriptor]
    assert len(gif.frames) == 1
    assert gif.delays == [100]
    assert gif.loop_count == 0

    frame = gif.frames[0]
    assert frame.graphic_control is gif.blocks[1]
    assert frame.graphic_control.disposal_method is DisposalMethod.UNSPECIFIED
    assert frame.lzw_minimum_code_size == 2
    assert frame.lzw_data == b'\x44\x01'
    assert not frame.interlaced

    assert gif.size == len(simple_gif)
    assert gif.raw == simple_gif


def test_gif_file_layout(simple_gif):
    gif = GifFile(simple_gif)

    assert [(offset, size) for _, offset, size in gif.layout] == [
        (19, 19),
        (38, 8),
        (46, 15),
    ]
    assert gif.color_tables_end == 19


def test_gif_file_from_path(tmp_path, simple_gif):
    path = tmp_path / 'simple.gif'
    path.write_bytes(simple_gif)

    assert GifFile(str(path)).loop_count == 0

    with open(path, 'rb') as f:
        gif = GifFile(f)
        assert not f.closed

    assert gif.delays == [100]


def test_gif_file_bad_signature(simple_gif):
    data = b'XIF' + simple_gif[3:]

    with pytest.raises(MagicException):
        GifFile(data)

    gif = GifFile(data, compliant=Compliant.NONE)

    assert gif.header.test_state(ErrorState.BAD_SIGNATURE)
    assert any(flag == ErrorState.BAD_SIGNATURE for flag, _ in gif.errors)
    assert len(gif.frames) == 1


def test_gif_file_bad_version(simple_gif):
    gif = GifFile(b'GIF90a' + simple_gif[6:])

    assert gif.header.test_state(ErrorState.BAD_VERSION)


def test_gif_file_truncated(simple_gif):
    gif = GifFile(simple_gif[:-5])

    assert gif.test_state(ErrorState.TRAILER_MISSING)
    assert len(gif.frames) == 1
    assert gif.frames[0].test_state(ErrorState.END_OF_INPUT_STREAM)
    assert any(flag == ErrorState.END_OF_INPUT_STREAM for flag, _ in gif.errors)


def test_gif_file_without_trailer(simple_gif):
    gif = GifFile(simple_gif[:-1])

    assert gif.test_state(ErrorState.TRAILER_MISSING)
    assert gif.frames[0].ok


def test_gif_file_truncated_inside_identification_block(simple_gif):
    gif = GifFile(simple_gif[:25])

    assert gif.test_state(ErrorState.END_OF_INPUT_STREAM)
    assert gif.test_state(ErrorState.TRAILER_MISSING)
    assert gif.blocks == []
    assert gif.loop_count is None
    assert any('identification block' in message for _, message in gif.errors)


def test_gif_file_malformed_identification_block(simple_gif):
    # a complete file whose application extension is too short is not a truncation
    data = simple_gif[:21] + b'\x03NET\x00' + simple_gif[38:]

    with pytest.raises(FormatException):
        GifFile(data)


def test_gif_file_graphic_control_without_terminator(simple_gif):
    # the graphic control extension spans 38..45, its terminator is the last byte
    data = simple_gif[:45] + simple_gif[46:]

    gif = GifFile(data)

    assert [type(_) for _ in gif.blocks] == [NetscapeExtension, GraphicControlExtension, ImageDescriptor]
    assert gif.blocks[1].test_state(ErrorState.BLOCK_TERMINATOR_MISSING)
    assert not gif.test_state(ErrorState.TRAILER_MISSING)
    assert gif.delays == [100]
    assert gif.frames[0].ok


def test_gif_file_unknown_introducer(simple_gif):
    gif = GifFile(simple_gif[:-1] + b'\x99')

    assert gif.test_state(ErrorState.UNKNOWN_BLOCK_INTRODUCER)
    assert not gif.test_state(ErrorState.TRAILER_MISSING)
    assert len(gif.frames) == 1


def test_gif_file_written_by_pillow(make_gif):
    data = make_gif(loop=5, durations=(100, 200, 300), size=(8, 6))

    gif = GifFile(io.BytesIO(data))

    assert gif.width == 8
    assert gif.height == 6
    assert len(gif.frames) == 3
    assert gif.delays == [100, 200, 300]
    assert gif.loop_count == 5
    assert gif.netscape.application_identifier == 'NETSCAPE'


def test_set_loop_count(simple_gif):
    data = set_loop_count(simple_gif, -1)

    assert len(data) == len(simple_gif)
    assert GifFile(data).loop_count == -1


def test_set_loop_count_read_by_pillow(make_gif):
    data = make_gif(loop=0, durations=(100, 200))

    looped = set_loop_count(data, 3)
    assert GifFile(looped).loop_count == 3
    with Image.open(io.BytesIO(looped)) as image:
        assert image.info['loop'] == 3

    removed = set_loop_count(data, None)
    gif = GifFile(removed)
    assert gif.netscape is None
    assert gif.loop_count is None
    assert gif.delays == [100, 200]
    assert len(removed) == len(data) - len(NetscapeExtension.from_loop_count(0).pack())

    inserted = set_loop_count(removed, 7)
    assert GifFile(inserted).loop_count == 7
    with Image.open(io.BytesIO(inserted)) as image:
        assert image.info['loop'] == 7
