from typing import List

from ..blocks import DataBlock, as_stream, iter_data_blocks, to_data_blocks
from ..core import GifComponent
from ..enum import BlockIntroducer, Compliant, ErrorState
from ..streams import Stream


class Extension(GifComponent):
    '''Any extension of the data stream: after the introducer (0x21) and the label
    there is a chain of data blocks closed by a terminator.

    The introducer and the label are consumed by whoever reads the stream
    before dispatching on the label, so they are not part of raw; pack()
    prepends them.'''
    label = None

    def __init__(self, blocks=None, label=None, stream=None, compliant=Compliant.NONE):
        super().__init__(compliant=compliant)
        if label is not None:
            self.label = label

        if stream is not None:
            blocks = self.unpack(as_stream(stream))

        self.blocks: List[DataBlock] = list(blocks or [])

        self.build()
        self._done()

    def __repr__(self):
        return f'<{self.__class__.__name__}(label=0x{self.label:02x}, blocks={len(self.blocks)})>'

    @classmethod
    def from_data(cls, data: bytes, label: int) -> "Extension":
        '''e.g. a comment extension from its text'''
        return cls(blocks=to_data_blocks(data), label=label)

    def build(self) -> None:
        '''Interpret self.blocks, subclasses raise here when the blocks
        don't describe a valid extension.'''
        pass

    @property
    def is_terminated(self) -> bool:
        return bool(self.blocks) and self.blocks[-1].is_terminator

    @property
    def data(self) -> bytes:
        return b''.join(_.data for _ in self.blocks)

    def get_components(self):
        return self.blocks

    def _get_raw(self) -> bytes:
        raw = b''.join(_.raw for _ in self.blocks)
        if not self.is_terminated:
            raw += DataBlock(0, b'').raw

        return raw

    def pack(self) -> bytes:
        return bytes([BlockIntroducer.EXTENSION.value, self.label]) + self.raw

    def unpack(self, stream: Stream) -> List[DataBlock]:
        offset = stream.position
        self.logger.debug('unpacking %s at offset %d' % (self.__class__.__name__, offset))

        blocks = list(iter_data_blocks(stream))

        if blocks[-1].test_state(ErrorState.END_OF_INPUT_STREAM):
            self.set_status(
                ErrorState.END_OF_INPUT_STREAM,
                f'the stream ended before the terminator of the extension at offset {offset}')

        self._consumed(stream, offset)

        return blocks
