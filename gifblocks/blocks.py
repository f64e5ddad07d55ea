'''
# Data sub-blocks

Every variable length part of a GIF data stream (extension payloads, image
data) is a chain of sub-blocks, each one with the following layout

  .------------.---------------------.
  | size (u8)  | size bytes of data  |
  '------------'---------------------'

A block with size zero is the terminator of the chain.

See <https://www.w3.org/Graphics/GIF/spec-gif89a.txt> section 15.
'''
from typing import Iterator, List

from .core import GifComponent
from .enum import Compliant, ErrorState
from .streams import Stream


MAX_BLOCK_SIZE = 0xff


def as_stream(obj) -> Stream:
    return obj if isinstance(obj, Stream) else Stream(obj)


class DataBlock(GifComponent):
    """A single length prefixed chunk of data.

    When read from a stream that ends too early the block keeps the bytes it
    was able to read and flags END_OF_INPUT_STREAM: the size declared and the
    actual size differ in that case. A terminator is *not* an error.
    """

    def __init__(self, declared_size=None, data=b'', stream=None, compliant=Compliant.NONE):
        super().__init__(compliant=compliant)
        self.declared_size = 0
        self.data = b''

        if stream is not None:
            self.unpack(as_stream(stream))
        else:
            data = bytes(data)
            declared_size = len(data) if declared_size is None else declared_size

            if not 0 <= declared_size <= MAX_BLOCK_SIZE:
                raise ValueError(f'a data block size must be between 0 and {MAX_BLOCK_SIZE}, not {declared_size}')

            if len(data) != declared_size:
                raise ValueError(f'the block size is {declared_size} but {len(data)} bytes of data were supplied')

            self.declared_size = declared_size
            self.data = data

        self._done()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.declared_size}, {self.data!r})>'

    def __len__(self):
        return self.actual_size

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self.actual_size:
            raise IndexError(f'index {index} is out of range for a block of {self.actual_size} bytes')

        return self.data[index]

    @property
    def actual_size(self) -> int:
        return len(self.data)

    @property
    def is_terminator(self) -> bool:
        return self.declared_size == 0

    def _get_raw(self) -> bytes:
        return bytes([self.declared_size]) + self.data

    def unpack(self, stream: Stream) -> None:
        offset = stream.position
        self.logger.debug('unpacking %s at offset %d' % (self.__class__.__name__, offset))

        declared_size = stream.read_byte()
        if declared_size is None:
            self.set_status(
                ErrorState.END_OF_INPUT_STREAM,
                f'the stream ended at offset {offset} before the size of the data block')
            self._consumed(stream, offset)
            return

        self.declared_size = declared_size
        self.data = stream.read(declared_size)

        if self.actual_size < self.declared_size:
            self.set_status(
                ErrorState.END_OF_INPUT_STREAM,
                f'the data block at offset {offset} should be {self.declared_size} bytes long '
                f'but the stream ended after {self.actual_size} bytes')

        self._consumed(stream, offset)


def iter_data_blocks(stream: Stream, compliant=Compliant.NONE) -> Iterator[DataBlock]:
    '''Read blocks until the terminator or the end of the stream, the last one
    yielded is either a terminator or a block flagged END_OF_INPUT_STREAM.'''
    while True:
        block = DataBlock(stream=stream, compliant=compliant)
        yield block

        if block.is_terminator or block.test_state(ErrorState.END_OF_INPUT_STREAM):
            break


def to_data_blocks(data: bytes) -> List[DataBlock]:
    '''Split arbitrary data into a terminated chain of sub-blocks.'''
    blocks = [DataBlock(data=data[_:_ + MAX_BLOCK_SIZE]) for _ in range(0, len(data), MAX_BLOCK_SIZE)]
    blocks.append(DataBlock(0, b''))

    return blocks
