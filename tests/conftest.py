import io
import struct

import pytest
from PIL import Image


NETSCAPE_LOOP_FOREVER = b'\x21\xff\x0bNETSCAPE2.0\x03\x01\x00\x00\x00'
GRAPHIC_CONTROL_100MS = b'\x21\xf9\x04\x00\x0a\x00\x00\x00'


@pytest.fixture
def simple_gif():
    """2x2 image with a two colors global color table, looping forever."""
    return (
        b'GIF89a' +
        struct.pack('<HHBBB', 2, 2, 0b10000000, 0, 0) +
        b'\x00\x00\x00\xff\xff\xff' +
        NETSCAPE_LOOP_FOREVER +
        GRAPHIC_CONTROL_100MS +
        b'\x2c' + struct.pack('<HHHHB', 0, 0, 2, 2, 0) +
        b'\x02' +
        b'\x02\x44\x01' +
        b'\x00' +
        b'\x3b'
    )


@pytest.fixture
def make_gif():
    """Use Pillow to write an animation with one solid color frame per duration."""
    colors = ['red', 'blue', 'green', 'yellow']

    def _make(loop=0, durations=(100, 200), size=(8, 6)):
        frames = [Image.new('RGB', size, colors[_ % len(colors)]) for _ in range(len(durations))]
        kwargs = {
            'save_all': True,
            'append_images': frames[1:],
            'duration': list(durations),
        }
        if loop is not None:
            kwargs['loop'] = loop

        buffer = io.BytesIO()
        frames[0].save(buffer, format='GIF', **kwargs)

        return buffer.getvalue()

    return _make
