import io
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file objects to
    uniform their properties: it's a forward-only byte source that never
    seeks and keeps count of how many bytes have been consumed.

    Reading past the end is not an error: read() returns fewer bytes,
    read_byte() returns None and exhausted becomes True.

    peek_byte() looks at the next byte without consuming it.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self._owned = False
        self._pending = b''
        self.obj = obj
        self.position = 0
        self.exhausted = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __repr__(self):
        return '<%s(%s @ %d)>' % (self.__class__.__name__, self._type.__name__, self.position)

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self._owned = True

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self._owned = True

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))
        self._owned = True

    def init_file(self):
        '''Anything else must be a binary file object, we don't own it'''
        if not hasattr(self.obj, 'read'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def _read(self, size):
        data = self.obj.read(size)
        if size < 0 or len(data) < size:
            self.exhausted = True

        return data

    def read(self, size=-1):
        data = b''
        if self._pending and size != 0:
            data, self._pending = self._pending, b''
            if size > 0:
                size -= 1

        if size != 0:
            data += self._read(size)

        self.position += len(data)

        return data

    def peek_byte(self):
        '''Like read_byte() but the byte is still there for the next read.'''
        if not self._pending:
            self._pending = self._read(1)

        return self._pending[0] if self._pending else None

    def read_byte(self):
        '''It returns the next byte as an integer or None if the stream is exhausted.'''
        data = self.read(1)

        return data[0] if data else None

    def close(self):
        if self._owned:
            self.obj.close()
