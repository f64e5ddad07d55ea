#!/usr/bin/env python3
'''
Rewrite the loop count of an animated GIF

 $ gifloop.py animation.gif 0 forever.gif
 $ gifloop.py animation.gif none once.gif

The result is opened with Pillow to check it reads back the same value.
'''
import logging
import sys
import os

from PIL import Image

from gifblocks.gif import set_loop_count


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} <gif file path> <loop count|none> [output path]')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    path = sys.argv[1]
    loop_count = None if sys.argv[2].lower() == 'none' else int(sys.argv[2])
    output = sys.argv[3] if len(sys.argv) > 3 else path

    with open(path, 'rb') as f:
        data = f.read()

    data = set_loop_count(data, loop_count)

    with open(output, 'wb') as f:
        f.write(data)

    logger.info(f'written {len(data)} bytes to {output}')

    with Image.open(output) as image:
        print(f'loop count read by Pillow: {image.info.get("loop")}')
