'''
# Graphic Control Extension

It contains parameters used when processing the graphic rendering block
that follows it. Its label is 0xF9 and its body is a single 4 bytes block

  .----------------------------------------------------.
  | 4 (u8) | packed | delay time (u16) | transparent   |
  | 0x00                                               |
  '----------------------------------------------------'

with the packed field made of

  <reserved:3><disposal method:3><user input:1><transparent color:1>

See <https://www.w3.org/Graphics/GIF/spec-gif89a.txt> section 23.
'''
import struct
from typing import List

from ..blocks import DataBlock
from ..enum import Compliant, DisposalMethod, ErrorState, ExtensionLabel
from ..exceptions import UnpackException
from ..fields import BitField, PackedFields
from ..streams import Stream
from .base import Extension


BLOCK_SIZE = 4


class GraphicControlExtension(Extension):
    label = ExtensionLabel.GRAPHIC_CONTROL.value

    disposal = BitField(3, 3)
    user_input = BitField(6)
    has_transparent_color = BitField(7)

    def __init__(self, delay_time=0, disposal_method=DisposalMethod.UNSPECIFIED, user_input=False,
                 transparent_index=None, stream=None, compliant=Compliant.NONE):
        self.packed = PackedFields()
        self.delay_time = delay_time
        self.transparent_index = 0

        blocks = None
        if stream is None:
            self.disposal = DisposalMethod(disposal_method).value
            self.user_input = user_input
            if transparent_index is not None:
                self.has_transparent_color = True
                self.transparent_index = transparent_index

            blocks = [DataBlock(data=self._pack_block()), DataBlock(0, b'')]

        super().__init__(blocks=blocks, stream=stream, compliant=compliant)

    def __repr__(self):
        return '<%s(delay=%d, disposal=%r, transparent=%r)>' % (
            self.__class__.__name__,
            self.delay_time,
            self.disposal_method,
            self.transparent_color,
        )

    @property
    def disposal_method(self):
        '''The DisposalMethod, or the raw value if it's a reserved one.'''
        try:
            return DisposalMethod(self.disposal)
        except ValueError:
            return self.disposal

    @property
    def delay_ms(self) -> int:
        return self.delay_time * 10

    @property
    def transparent_color(self):
        return self.transparent_index if self.has_transparent_color else None

    def _pack_block(self) -> bytes:
        return struct.pack('<BHB', self.packed.byte, self.delay_time, self.transparent_index)

    def build(self) -> None:
        block = self.blocks[0]

        if not block.is_terminator:
            # a truncated block is already flagged, what is missing reads as zero
            data = block.data[:BLOCK_SIZE].ljust(BLOCK_SIZE, b'\x00')
            packed, self.delay_time, self.transparent_index = struct.unpack('<BHB', data)
            self.packed = PackedFields(packed)

        if self.disposal not in [_.value for _ in DisposalMethod]:
            message = f'disposal method {self.disposal} is reserved'
            if self.compliant & Compliant.ENUM:
                raise UnpackException(message, chain=[self.__class__.__name__])
            self.set_status(ErrorState.UNKNOWN_DISPOSAL_METHOD, message)

    def _get_raw(self) -> bytes:
        return DataBlock(data=self._pack_block()).raw + DataBlock(0, b'').raw

    def unpack(self, stream: Stream) -> List[DataBlock]:
        '''The body has a fixed size: one block and the terminator, whatever
        follows a missing terminator is left to the caller.'''
        offset = stream.position
        self.logger.debug('unpacking %s at offset %d' % (self.__class__.__name__, offset))

        block = DataBlock(stream=stream)
        blocks = [block]

        if block.test_state(ErrorState.END_OF_INPUT_STREAM):
            self.set_status(
                ErrorState.END_OF_INPUT_STREAM,
                f'the stream ended inside the graphic control block at offset {offset}')
        elif not block.is_terminator:
            following = stream.peek_byte()
            if following == 0:
                blocks.append(DataBlock(stream=stream))
            elif following is None:
                self.set_status(
                    ErrorState.END_OF_INPUT_STREAM,
                    f'the stream ended before the terminator of the graphic control extension at offset {offset}')
            else:
                self.set_status(
                    ErrorState.BLOCK_TERMINATOR_MISSING,
                    f'expected the block terminator at offset {stream.position}, found 0x{following:02x}')

        self._consumed(stream, offset)

        return blocks
