"""
Core module for the status bearing components of a GIF data stream

"""
import logging
from typing import List, Tuple

from .enum import Compliant, ErrorState
from .exceptions import StatusException


class GifComponent(object):
    """
    Base class of every parsed/built unit of the format.

    A component is built in one shot (from a stream or from its values) and
    while it's built it can collect a set of non exclusive status flags,
    each one with a message explaining what happened. A flag once set is
    never cleared and the messages are kept in the order they were recorded.

    offset and size identify the bytes the component claimed from the stream.
    """

    def __init__(self, compliant=Compliant.NONE):
        self.logger = logging.getLogger(f'{self.__module__}.{self.__class__.__name__}')
        self.compliant = compliant
        self.status = ErrorState.OK
        self.messages: List[Tuple[ErrorState, str]] = []
        self.offset = None
        self._size = None

    def set_status(self, flag: ErrorState, message: str) -> None:
        self.logger.warning(message)
        self.status |= flag
        self.messages.append((flag, message))

    def test_state(self, flag: ErrorState) -> bool:
        return bool(self.status & flag)

    @property
    def ok(self) -> bool:
        return self.status == ErrorState.OK

    def get_components(self) -> List["GifComponent"]:
        '''The nested components whose status is reported with ours.'''
        return []

    @property
    def errors(self) -> List[Tuple[ErrorState, str]]:
        result = list(self.messages)
        for component in self.get_components():
            result.extend(component.errors)

        return result

    def raise_for_status(self) -> None:
        if self.ok:
            return

        message = '; '.join(_msg for _, _msg in self.messages)
        raise StatusException(message, chain=[self.__class__.__name__], status=self.status)

    def _done(self) -> None:
        '''To be called at the end of the construction.'''
        if self.compliant & Compliant.STATUS:
            self.raise_for_status()

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    @property
    def size(self) -> int:
        '''the number of bytes consumed when unpacked, otherwise the size of the encoding'''
        if self._size is not None:
            return self._size

        return len(self.raw)

    def _consumed(self, stream, offset) -> None:
        self.offset = offset
        self._size = stream.position - offset
