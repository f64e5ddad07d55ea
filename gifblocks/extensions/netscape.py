'''
# Netscape 2.0 extension

An application extension which controls the number of times an animation
should be displayed. Its data sub-blocks start with an id byte

  1: loop count, u16 little endian (0 means loop forever)
  2: buffer size, u32 little endian

See <http://www.let.rug.nl/~kleiweg/gif/netscape.html>.
'''
import logging
import struct

from ..blocks import DataBlock
from ..enum import Compliant, ErrorState
from ..exceptions import FormatException
from .application import ApplicationExtension


IDENTIFIER = 'NETSCAPE'
AUTHENTICATION_CODE = '2.0'

LOOP_SUB_BLOCK_ID = 1
BUFFER_SUB_BLOCK_ID = 2

LOOP_FOREVER = 0
NO_REPEAT = -1
# NO_REPEAT travels on the wire as the largest u16
NO_REPEAT_ENCODED = 0xffff


def encode_loop_count(loop_count: int) -> int:
    if not NO_REPEAT <= loop_count < NO_REPEAT_ENCODED:
        raise ValueError(f'loop count must be between {NO_REPEAT} and {NO_REPEAT_ENCODED - 1}, not {loop_count}')

    return loop_count & 0xffff


def decode_loop_count(value: int) -> int:
    return NO_REPEAT if value == NO_REPEAT_ENCODED else value


class NetscapeExtension(ApplicationExtension):
    """
    loop_count is 0 to repeat indefinitely, -1 to not repeat and N to repeat
    N times; it's None when the extension doesn't carry a loop sub-block
    (and the status LOOP_COUNT_UNSPECIFIED is set).
    """

    def __repr__(self):
        return f'<{self.__class__.__name__}(loop_count={self.loop_count!r})>'

    @classmethod
    def from_loop_count(cls, loop_count: int, compliant=Compliant.NONE) -> "NetscapeExtension":
        identification_block = DataBlock(data=(IDENTIFIER + AUTHENTICATION_CODE).encode('ascii'))
        application_data = [
            DataBlock(data=struct.pack('<BH', LOOP_SUB_BLOCK_ID, encode_loop_count(loop_count))),
            DataBlock(0, b''),
        ]

        extension = cls(identification_block, application_data, compliant=compliant)
        extension.loop_count = loop_count

        return extension

    @classmethod
    def from_application_extension(cls, extension: ApplicationExtension) -> "NetscapeExtension":
        '''The identification block has already been validated (and its status
        recorded) by extension, only the Netscape part is interpreted here.'''
        netscape = cls.__new__(cls)
        netscape.__dict__.update(extension.__dict__)
        netscape.logger = logging.getLogger(f'{cls.__module__}.{cls.__name__}')
        netscape.blocks = list(extension.blocks)
        netscape.messages = list(extension.messages)

        netscape._interpret()
        netscape._done()

        return netscape

    def build(self) -> None:
        super().build()
        self._interpret()

    def _interpret(self) -> None:
        if self.application_identifier != IDENTIFIER:
            raise FormatException(
                f"The application identifier is not '{IDENTIFIER}' therefore this application "
                f"extension is not a Netscape extension. Application identifier: {self.application_identifier}",
                chain=[self.__class__.__name__])

        if self.application_authentication_code != AUTHENTICATION_CODE:
            raise FormatException(
                f"The application authentication code is not '{AUTHENTICATION_CODE}' therefore this "
                "application extension is not a Netscape extension. Application authentication code: "
                f"{self.application_authentication_code}",
                chain=[self.__class__.__name__])

        self.loop_count = None
        self.buffer_size = None

        for block in self.application_data:
            if block.actual_size == 0:
                break

            # the last one wins
            if block.actual_size > 2 and block[0] == LOOP_SUB_BLOCK_ID:
                (value,) = struct.unpack('<H', block.data[1:3])
                self.loop_count = decode_loop_count(value)
            elif block.actual_size > 4 and block[0] == BUFFER_SUB_BLOCK_ID:
                (self.buffer_size,) = struct.unpack('<I', block.data[1:5])

        if self.loop_count is None:
            self.set_status(
                ErrorState.LOOP_COUNT_UNSPECIFIED,
                'the Netscape extension has no loop count sub-block')

    @property
    def loops_forever(self) -> bool:
        return self.loop_count == LOOP_FOREVER
