import io

import pytest

from gifblocks.blocks import DataBlock, iter_data_blocks, to_data_blocks
from gifblocks.enum import ErrorState
from gifblocks.streams import Stream


def test_data_block_from_stream():
    stream = Stream(bytes([5, 1, 2, 3, 4, 5]))

    block = DataBlock(stream=stream)

    assert block.declared_size == 5
    assert block.actual_size == 5
    assert block.data == bytes([1, 2, 3, 4, 5])
    assert [block[_] for _ in range(5)] == [1, 2, 3, 4, 5]
    assert block.status == ErrorState.OK
    assert block.messages == []

    assert block.offset == 0
    assert block.size == 6
    assert stream.position == 6


def test_data_block_truncated():
    block = DataBlock(stream=bytes([5, 1, 2]))

    assert block.declared_size == 5
    assert block.actual_size == 2
    assert block.data == b'\x01\x02'
    assert block.test_state(ErrorState.END_OF_INPUT_STREAM)
    assert len(block.messages) == 1
    assert block.size == 3


def test_data_block_empty_stream():
    block = DataBlock(stream=b'')

    assert block.declared_size == 0
    assert block.actual_size == 0
    assert block.test_state(ErrorState.END_OF_INPUT_STREAM)
    assert block.size == 0


def test_data_block_terminator():
    """A terminator is a normal block, not an error."""
    stream = Stream(b'\x00\x2c')

    block = DataBlock(stream=stream)

    assert block.is_terminator
    assert block.ok
    assert block.size == 1
    assert stream.read_byte() == 0x2c


def test_data_block_direct():
    block = DataBlock(3, [1, 2, 3])

    assert block.declared_size == 3
    assert block.actual_size == 3
    assert block.raw == b'\x03\x01\x02\x03'
    assert block.size == 4
    assert block.offset is None
    assert block.ok

    assert DataBlock(data=b'ab').declared_size == 2

    with pytest.raises(ValueError):
        DataBlock(4, b'abc')

    with pytest.raises(ValueError):
        DataBlock(256, b'\x00' * 256)


def test_data_block_index_out_of_range():
    block = DataBlock(3, b'abc')

    assert block[2] == ord('c')

    for index in (-1, 3):
        with pytest.raises(IndexError):
            block[index]

    with pytest.raises(IndexError):
        DataBlock(stream=b'\x03a')[1]


def test_iter_data_blocks_consumes_only_the_chain():
    stream = Stream(b'\x02ab\x01c\x00\x3b')

    blocks = list(iter_data_blocks(stream))

    assert [_.data for _ in blocks] == [b'ab', b'c', b'']
    assert blocks[-1].is_terminator
    assert stream.position == 6
    assert stream.read_byte() == 0x3b


def test_iter_data_blocks_exhausted():
    blocks = list(iter_data_blocks(Stream(b'\x02ab\x03c')))

    assert len(blocks) == 2
    assert blocks[0].ok
    assert blocks[-1].test_state(ErrorState.END_OF_INPUT_STREAM)
    assert blocks[-1].data == b'c'


def test_to_data_blocks():
    assert [_.raw for _ in to_data_blocks(b'')] == [b'\x00']
    assert [_.raw for _ in to_data_blocks(b'abc')] == [b'\x03abc', b'\x00']

    raw = b''.join(_.raw for _ in to_data_blocks(b'\x01' * 300))
    blocks = list(iter_data_blocks(Stream(raw)))

    assert [_.declared_size for _ in blocks] == [255, 45, 0]
    assert b''.join(_.data for _ in blocks) == b'\x01' * 300


def test_stream_from_path(tmp_path):
    path = tmp_path / 'data'
    path.write_bytes(b'\x01\x02\x03')

    for source in (path, str(path)):
        with Stream(source) as stream:
            assert stream.read_byte() == 0x01
            assert stream.read(5) == b'\x02\x03'
            assert stream.read_byte() is None
            assert stream.position == 3


def test_stream_file_object_is_not_closed():
    obj = io.BytesIO(b'\x01\x02')

    stream = Stream(obj)
    assert stream.read(1) == b'\x01'
    stream.close()

    assert not obj.closed
    assert obj.read() == b'\x02'


def test_stream_wrong_object():
    with pytest.raises(ValueError):
        Stream(42)


def test_stream_peek_byte():
    stream = Stream(b'\x01\x02')

    assert stream.peek_byte() == 0x01
    assert stream.peek_byte() == 0x01
    assert stream.position == 0

    assert stream.read(2) == b'\x01\x02'
    assert stream.position == 2
    assert not stream.exhausted

    assert stream.peek_byte() is None
    assert stream.read_byte() is None
    assert stream.exhausted


def test_stream_exhausted_on_short_read():
    stream = Stream(b'\x01\x02')

    assert stream.read(3) == b'\x01\x02'
    assert stream.exhausted
