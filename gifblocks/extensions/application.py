'''
# Application Extension

The Application Extension contains application-specific information; it
conforms with the extension block syntax, and its block label is 0xFF.

  .-----------------------------------------------.
  | 11 (u8) | identifier (8) | auth code (3)      |  identification block
  |-----------------------------------------------|
  | data sub-blocks ...                           |  application data
  | 0x00                                          |  terminator
  '-----------------------------------------------'

See <https://www.w3.org/Graphics/GIF/spec-gif89a.txt> section 26.
'''
from typing import List

from ..blocks import DataBlock, iter_data_blocks
from ..enum import Compliant, ErrorState, ExtensionLabel
from ..exceptions import FormatException
from ..streams import Stream
from .base import Extension


IDENTIFICATION_BLOCK_SIZE = 11
IDENTIFIER_SIZE = 8


class ApplicationExtension(Extension):
    label = ExtensionLabel.APPLICATION.value

    def __init__(self, identification_block=None, application_data=None, stream=None, compliant=Compliant.NONE):
        self.application_identifier = None
        self.application_authentication_code = None

        blocks = None
        if stream is None:
            if identification_block is None:
                raise ValueError(f'{self.__class__.__name__} needs an identification block or a stream')

            if not isinstance(identification_block, DataBlock):
                identification_block = DataBlock(data=identification_block)

            blocks = [identification_block] + list(application_data or [])

        super().__init__(blocks=blocks, stream=stream, compliant=compliant)

    def __repr__(self):
        return '<%s(%r, %r, data=%d blocks)>' % (
            self.__class__.__name__,
            self.application_identifier,
            self.application_authentication_code,
            len(self.application_data),
        )

    @property
    def identification_block(self) -> DataBlock:
        return self.blocks[0]

    @property
    def application_data(self) -> List[DataBlock]:
        return self.blocks[1:]

    def build(self) -> None:
        length = self.identification_block.actual_size

        if length < IDENTIFICATION_BLOCK_SIZE:
            raise FormatException(
                f'The identification block should be {IDENTIFICATION_BLOCK_SIZE} bytes long '
                f'but is only {length} bytes.',
                chain=[self.__class__.__name__])

        if length > IDENTIFICATION_BLOCK_SIZE:
            self.set_status(
                ErrorState.IDENTIFICATION_BLOCK_TOO_LONG,
                f'The identification block should be {IDENTIFICATION_BLOCK_SIZE} bytes long '
                f'but is {length} bytes long. Additional bytes are ignored.')

        data = self.identification_block.data
        # one char per byte whatever the value
        self.application_identifier = data[:IDENTIFIER_SIZE].decode('latin-1')
        self.application_authentication_code = data[IDENTIFIER_SIZE:IDENTIFICATION_BLOCK_SIZE].decode('latin-1')

    def unpack(self, stream: Stream) -> List[DataBlock]:
        offset = stream.position
        self.logger.debug('unpacking %s at offset %d' % (self.__class__.__name__, offset))

        identification_block = DataBlock(stream=stream)
        blocks = [identification_block]

        if identification_block.test_state(ErrorState.END_OF_INPUT_STREAM):
            self.set_status(
                ErrorState.END_OF_INPUT_STREAM,
                f'the stream ended inside the identification block at offset {offset}')
        else:
            blocks.extend(iter_data_blocks(stream))

            if blocks[-1].test_state(ErrorState.END_OF_INPUT_STREAM):
                self.set_status(
                    ErrorState.END_OF_INPUT_STREAM,
                    f'the stream ended before the terminator of the application extension at offset {offset}')

        self._consumed(stream, offset)

        return blocks
