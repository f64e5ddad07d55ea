"""
A packed field is a single byte of the data stream multiplexing several
data items, each one made of one or more contiguous bits.

The GIF89a specification documents them with the most significant bit
first, so the bit with index 0 is worth 128 and the one with index 7 is
worth 1; a multi-bit item has its most significant bit at the lowest index.
"""
from bitstring import BitArray, Bits


def _check_index(index, name='index'):
    if not 0 <= index <= 7:
        raise ValueError(f'{name} must be between 0 and 7. Supplied {name}: {index}')


def _check_range(start, length):
    _check_index(start, name='start index')
    if length < 1 or start + length > 8:
        raise ValueError(
            'length must be greater than zero and the sum of length and start index '
            f'must not exceed 8. Supplied length: {length}. Supplied start index: {start}')


class PackedFields(object):
    """Bit-level view of a single byte."""

    def __init__(self, data=0):
        if not 0 <= data <= 0xff:
            raise ValueError(f'a packed field is a single byte, {data} is out of range')
        self._bits = BitArray(uint=data, length=8)

    def __repr__(self):
        return f'<{self.__class__.__name__}(0b{self._bits.bin})>'

    def __int__(self):
        return self.byte

    def __eq__(self, other):
        if isinstance(other, PackedFields):
            return self.byte == other.byte
        return NotImplemented

    @property
    def byte(self) -> int:
        return self._bits.uint

    def set_bit(self, index: int, value: bool) -> None:
        _check_index(index)
        self._bits[index] = bool(value)

    def get_bit(self, index: int) -> bool:
        _check_index(index)
        return self._bits[index]

    def set_bits(self, start: int, length: int, value: int) -> None:
        '''Only the "length" least significant bits of value are used.'''
        _check_range(start, length)
        self._bits[start:start + length] = Bits(uint=value & ((1 << length) - 1), length=length)

    def get_bits(self, start: int, length: int) -> int:
        _check_range(start, length)
        return self._bits[start:start + length].uint


class BitField(object):
    """Declare a named data item living inside a PackedFields attribute of a component.

        class Descriptor(GifComponent):
            has_color_table = BitField(0)
            color_table_size = BitField(5, 3)

    One bit long items without an enum are booleans, the others are integers
    (or members of the enum if indicated).
    """

    def __init__(self, start, length=1, enum=None, packed='packed'):
        _check_range(start, length)
        self.start = start
        self.length = length
        self.enum = enum
        self.packed = packed

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        packed = getattr(instance, self.packed)
        if self.length == 1 and not self.enum:
            return packed.get_bit(self.start)

        value = packed.get_bits(self.start, self.length)

        return self.enum(value) if self.enum else value

    def __set__(self, instance, value):
        packed = getattr(instance, self.packed)
        if self.enum and isinstance(value, self.enum):
            value = value.value

        if value >> self.length:
            raise ValueError(f"value {value} doesn't fit into the {self.length} bit(s) of '{self.name}'")

        packed.set_bits(self.start, self.length, int(value))
