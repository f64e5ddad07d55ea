class GifBlocksException(Exception):
    '''Base class to extend in order to throw exception in gifblocks.

    It takes an argument that represents the chain of the components that
    caused the exception, the innermost first.
    '''

    def __init__(self, message='', chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)


class UnpackException(GifBlocksException):
    pass


class MagicException(GifBlocksException):
    pass


class FormatException(GifBlocksException, ValueError):
    '''The data can be read but it doesn't describe what the caller asked for,
    e.g. an identification block too short or a foreign application extension.'''
    pass


class StatusException(GifBlocksException):
    '''Raised when the soft status collected by a component is escalated.'''

    def __init__(self, message='', chain=None, status=None):
        self.status = status
        super().__init__(message, chain=chain)
