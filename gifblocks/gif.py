'''
# Graphics Interchange Format

The data stream is made of a header, a logical screen descriptor with an
optional global color table and then a sequence of blocks, each one
starting with an introducer byte

  .-------------------------------------.
  | header "GIF87a" / "GIF89a"          |
  | logical screen descriptor           |
  | global color table (optional)       |
  | 0x21 label ... extensions           |
  | 0x2c image descriptor, image data   |
    ...
  | 0x3b trailer                        |
  '-------------------------------------'

Here we only frame the blocks: the image data is a chain of data blocks
holding LZW codes that are not decompressed.

See <https://www.w3.org/Graphics/GIF/spec-gif89a.txt>.
'''
import struct
from typing import List, Optional, Tuple

from .blocks import DataBlock, as_stream, iter_data_blocks
from .core import GifComponent
from .enum import BlockIntroducer, Compliant, ErrorState
from .exceptions import FormatException, MagicException
from .extensions import (
    ApplicationExtension,
    Extension,
    GraphicControlExtension,
    NetscapeExtension,
    read_extension,
)
from .fields import BitField, PackedFields
from .streams import Stream


SIGNATURE = b'GIF'
VERSIONS = (b'87a', b'89a')


def color_table_length(size: int) -> int:
    '''Number of bytes of a color table with the given 3 bits size field.'''
    return 3 * 2 ** (size + 1)


def _read_exactly(component: GifComponent, stream: Stream, size: int, what: str) -> bytes:
    offset = stream.position
    data = stream.read(size)
    if len(data) < size:
        component.set_status(
            ErrorState.END_OF_INPUT_STREAM,
            f'the stream ended at offset {stream.position} while reading the {what} '
            f'({len(data)} of {size} bytes starting at offset {offset})')

    return data


class Header(GifComponent):
    def __init__(self, version=b'89a', stream=None, compliant=Compliant.MAGIC):
        super().__init__(compliant=compliant)
        self.signature = SIGNATURE
        self.version = version

        if stream is not None:
            self.unpack(as_stream(stream))

        self._done()

    def __repr__(self):
        return f'<{self.__class__.__name__}({(self.signature + self.version)!r})>'

    def _get_raw(self) -> bytes:
        return self.signature + self.version

    def unpack(self, stream: Stream) -> None:
        offset = stream.position
        data = _read_exactly(self, stream, 6, 'header')
        self.signature, self.version = data[:3], data[3:6]

        if self.signature != SIGNATURE:
            message = f'the signature should be {SIGNATURE!r}, found {self.signature!r}'
            if self.compliant & Compliant.MAGIC:
                raise MagicException(message, chain=[self.__class__.__name__])
            self.set_status(ErrorState.BAD_SIGNATURE, message)

        if self.version not in VERSIONS:
            self.set_status(ErrorState.BAD_VERSION, f'unknown version {self.version!r}')

        self._consumed(stream, offset)


class LogicalScreenDescriptor(GifComponent):
    has_global_color_table  = BitField(0)
    color_resolution        = BitField(1, 3)
    sorted                  = BitField(4)
    global_color_table_size = BitField(5, 3)

    FORMAT = '<HHBBB'

    def __init__(self, width=0, height=0, packed=0, background_color_index=0, pixel_aspect_ratio=0,
                 stream=None, compliant=Compliant.NONE):
        super().__init__(compliant=compliant)
        self.width = width
        self.height = height
        self.packed = PackedFields(packed)
        self.background_color_index = background_color_index
        self.pixel_aspect_ratio = pixel_aspect_ratio

        if stream is not None:
            self.unpack(as_stream(stream))

        self._done()

    def __repr__(self):
        return '<%s(%dx%d, %r)>' % (self.__class__.__name__, self.width, self.height, self.packed)

    @property
    def global_color_table_length(self) -> int:
        return color_table_length(self.global_color_table_size) if self.has_global_color_table else 0

    def _get_raw(self) -> bytes:
        return struct.pack(
            self.FORMAT,
            self.width,
            self.height,
            self.packed.byte,
            self.background_color_index,
            self.pixel_aspect_ratio,
        )

    def unpack(self, stream: Stream) -> None:
        offset = stream.position
        size = struct.calcsize(self.FORMAT)
        data = _read_exactly(self, stream, size, 'logical screen descriptor').ljust(size, b'\x00')

        self.width, self.height, packed, self.background_color_index, self.pixel_aspect_ratio = \
            struct.unpack(self.FORMAT, data)
        self.packed = PackedFields(packed)

        self._consumed(stream, offset)


class ImageDescriptor(GifComponent):
    '''An image: descriptor, optional local color table and the chain of
    data blocks with the LZW encoded pixels (the introducer is not included).'''
    has_local_color_table  = BitField(0)
    interlaced             = BitField(1)
    sorted                 = BitField(2)
    local_color_table_size = BitField(5, 3)

    FORMAT = '<HHHHB'

    def __init__(self, stream, graphic_control=None, compliant=Compliant.NONE):
        super().__init__(compliant=compliant)
        self.left = self.top = self.width = self.height = 0
        self.packed = PackedFields()
        self.local_color_table = b''
        self.lzw_minimum_code_size = None
        self.image_data: List[DataBlock] = []
        self.graphic_control: Optional[GraphicControlExtension] = graphic_control

        self.unpack(as_stream(stream))

        self._done()

    def __repr__(self):
        return '<%s(%dx%d+%d+%d)>' % (self.__class__.__name__, self.width, self.height, self.left, self.top)

    @property
    def local_color_table_length(self) -> int:
        return color_table_length(self.local_color_table_size) if self.has_local_color_table else 0

    @property
    def lzw_data(self) -> bytes:
        return b''.join(_.data for _ in self.image_data)

    @property
    def delay_ms(self) -> int:
        return self.graphic_control.delay_ms if self.graphic_control else 0

    def get_components(self):
        return self.image_data

    def _get_raw(self) -> bytes:
        raw = struct.pack(self.FORMAT, self.left, self.top, self.width, self.height, self.packed.byte)
        raw += self.local_color_table
        if self.lzw_minimum_code_size is not None:
            raw += bytes([self.lzw_minimum_code_size])

        return raw + b''.join(_.raw for _ in self.image_data)

    def unpack(self, stream: Stream) -> None:
        offset = stream.position
        self.logger.debug('unpacking %s at offset %d' % (self.__class__.__name__, offset))

        size = struct.calcsize(self.FORMAT)
        data = _read_exactly(self, stream, size, 'image descriptor')
        if len(data) < size:
            self._consumed(stream, offset)
            return

        self.left, self.top, self.width, self.height, packed = struct.unpack(self.FORMAT, data)
        self.packed = PackedFields(packed)

        if self.has_local_color_table:
            self.local_color_table = _read_exactly(self, stream, self.local_color_table_length, 'local color table')

        if not self.test_state(ErrorState.END_OF_INPUT_STREAM):
            self.lzw_minimum_code_size = stream.read_byte()
            if self.lzw_minimum_code_size is None:
                self.set_status(ErrorState.END_OF_INPUT_STREAM, 'the stream ended before the LZW minimum code size')
            else:
                self.image_data = list(iter_data_blocks(stream))
                if self.image_data[-1].test_state(ErrorState.END_OF_INPUT_STREAM):
                    self.set_status(
                        ErrorState.END_OF_INPUT_STREAM,
                        f'the stream ended before the terminator of the image data at offset {offset}')

        self._consumed(stream, offset)


class GifFile(GifComponent):
    """Walk the whole data stream framing each block.

    It accepts a path, raw bytes or a binary file object (that is left open).
    Nothing after the trailer is read.
    """

    def __init__(self, source, compliant=Compliant.MAGIC):
        super().__init__(compliant=compliant)
        self.header: Optional[Header] = None
        self.screen: Optional[LogicalScreenDescriptor] = None
        self.global_color_table = b''
        self.blocks: List[GifComponent] = []
        self._layout: List[Tuple[GifComponent, int, int]] = []

        stream = as_stream(source)
        try:
            self.unpack(stream)
        finally:
            if stream is not source:
                stream.close()

        self._done()

    def __repr__(self):
        return '<%s(%dx%d, frames=%d, loop_count=%r)>' % (
            self.__class__.__name__, self.width, self.height, len(self.frames), self.loop_count)

    def get_components(self):
        return [self.header, self.screen] + self.blocks

    @property
    def layout(self) -> List[Tuple[GifComponent, int, int]]:
        '''(block, offset, size) of each block, introducer and label included.'''
        return list(self._layout)

    @property
    def width(self) -> int:
        return self.screen.width

    @property
    def height(self) -> int:
        return self.screen.height

    @property
    def color_tables_end(self) -> int:
        '''Offset of the first block after the global color table.'''
        return self.header.size + self.screen.size + len(self.global_color_table)

    @property
    def frames(self) -> List[ImageDescriptor]:
        return [_ for _ in self.blocks if isinstance(_, ImageDescriptor)]

    @property
    def extensions(self) -> List[Extension]:
        return [_ for _ in self.blocks if isinstance(_, Extension)]

    @property
    def application_extensions(self) -> List[ApplicationExtension]:
        return [_ for _ in self.blocks if isinstance(_, ApplicationExtension)]

    @property
    def netscape(self) -> Optional[NetscapeExtension]:
        for extension in self.application_extensions:
            if isinstance(extension, NetscapeExtension):
                return extension

        return None

    @property
    def loop_count(self) -> Optional[int]:
        '''None when the animation has no Netscape extension, i.e. it's played once.'''
        return self.netscape.loop_count if self.netscape else None

    @property
    def delays(self) -> List[int]:
        '''Delay in milliseconds of each frame.'''
        return [_.delay_ms for _ in self.frames]

    def _get_raw(self) -> bytes:
        raw = self.header.raw + self.screen.raw + self.global_color_table
        for block in self.blocks:
            if isinstance(block, Extension):
                raw += block.pack()
            else:
                raw += bytes([BlockIntroducer.IMAGE.value]) + block.raw

        return raw + bytes([BlockIntroducer.TRAILER.value])

    def unpack(self, stream: Stream) -> None:
        offset = stream.position

        self.header = Header(stream=stream, compliant=self.compliant)
        self.screen = LogicalScreenDescriptor(stream=stream, compliant=self.compliant)

        if self.screen.has_global_color_table:
            self.global_color_table = _read_exactly(
                self, stream, self.screen.global_color_table_length, 'global color table')

        graphic_control = None
        has_trailer = False

        while not self.test_state(ErrorState.END_OF_INPUT_STREAM):
            block_offset = stream.position
            introducer = stream.read_byte()

            if introducer is None:
                break

            if introducer == BlockIntroducer.TRAILER.value:
                has_trailer = True
                break

            if introducer == BlockIntroducer.EXTENSION.value:
                label = stream.read_byte()
                if label is None:
                    self.set_status(ErrorState.END_OF_INPUT_STREAM, f'the stream ended after the extension introducer at offset {block_offset}')
                    break

                try:
                    block = read_extension(stream, label, compliant=self.compliant)
                except FormatException as e:
                    # a truncated file, not a malformed extension
                    if not stream.exhausted:
                        raise
                    self.set_status(
                        ErrorState.END_OF_INPUT_STREAM,
                        f'the stream ended inside the extension at offset {block_offset}: {e}')
                    break

                if isinstance(block, GraphicControlExtension):
                    graphic_control = block
            elif introducer == BlockIntroducer.IMAGE.value:
                block = ImageDescriptor(stream, graphic_control=graphic_control, compliant=self.compliant)
                # the scope of a graphic control extension is the first image following it
                graphic_control = None
            else:
                self.set_status(
                    ErrorState.UNKNOWN_BLOCK_INTRODUCER,
                    f'unknown block introducer 0x{introducer:02x} at offset {block_offset}')
                break

            self.blocks.append(block)
            self._layout.append((block, block_offset, stream.position - block_offset))

            if block.test_state(ErrorState.END_OF_INPUT_STREAM):
                break

        if not has_trailer and not self.test_state(ErrorState.UNKNOWN_BLOCK_INTRODUCER):
            self.set_status(ErrorState.TRAILER_MISSING, 'the stream ended before the trailer')

        self._consumed(stream, offset)


def set_loop_count(data: bytes, loop_count: Optional[int]) -> bytes:
    '''Return a copy of the GIF data with its Netscape extension replaced by one
    carrying loop_count (inserted after the global color table when there is none);
    with loop_count None the Netscape extensions are removed.'''
    data = bytes(data)
    gif = GifFile(data)

    replacement = NetscapeExtension.from_loop_count(loop_count).pack() if loop_count is not None else b''

    spans = [(offset, size) for block, offset, size in gif.layout if isinstance(block, NetscapeExtension)]
    if not spans:
        position = gif.color_tables_end
        return data[:position] + replacement + data[position:]

    result = b''
    cursor = 0
    for offset, size in spans:
        result += data[cursor:offset] + replacement
        replacement = b''  # only the first one is replaced, the others are dropped
        cursor = offset + size

    return result + data[cursor:]
