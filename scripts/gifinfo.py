#!/usr/bin/env python3
import sys
import os
import logging

from gifblocks.extensions import (
    ApplicationExtension,
    GraphicControlExtension,
    NetscapeExtension,
)
from gifblocks.gif import GifFile, ImageDescriptor


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
if 'DEBUG' in os.environ:
    logging.getLogger().setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <gif file>' % progname)
    sys.exit(1)


def dump_header(gif):
    screen = gif.screen
    print(f'''GIF Header:
  Version:                 {gif.header.version.decode('latin-1')}
  Logical screen:          {screen.width}x{screen.height}
  Global color table:      {screen.has_global_color_table} ({screen.global_color_table_length} bytes, sorted={screen.sorted})
  Color resolution:        {screen.color_resolution + 1} bits
  Background color index:  {screen.background_color_index}
  Pixel aspect ratio:      {screen.pixel_aspect_ratio}''')


def describe(block):
    if isinstance(block, ImageDescriptor):
        return (f'image {block.width}x{block.height}+{block.left}+{block.top} '
                f'interlaced={block.interlaced} lct={block.local_color_table_length} '
                f'lzw={len(block.lzw_data)} bytes in {len(block.image_data)} blocks')
    if isinstance(block, GraphicControlExtension):
        return (f'graphic control delay={block.delay_ms}ms disposal={block.disposal_method} '
                f'transparent={block.transparent_color} user_input={block.user_input}')
    if isinstance(block, NetscapeExtension):
        return f'netscape loop_count={block.loop_count} buffer_size={block.buffer_size}'
    if isinstance(block, ApplicationExtension):
        return (f'application {block.application_identifier!r} {block.application_authentication_code!r} '
                f'{len(block.application_data)} blocks')

    return f'extension 0x{block.label:02x} {len(block.data)} bytes'


def dump_blocks(gif):
    print('Blocks:')
    print('  [Nr] Offset     Size       Description')
    for idx, (block, offset, size) in enumerate(gif.layout):
        print(f'  [{idx: >2d}] 0x{offset:08x} 0x{size:08x} {describe(block)}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    gif = GifFile(sys.argv[1])

    dump_header(gif)
    dump_blocks(gif)

    print(f'''Animation:
  Frames:      {len(gif.frames)}
  Delays (ms): {gif.delays}
  Loop count:  {gif.loop_count}''')

    for flag, message in gif.errors:
        print(f'{flag.name}: {message}')
