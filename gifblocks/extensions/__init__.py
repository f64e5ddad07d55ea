'''
Extensions are introduced by the byte 0x21 followed by a label that
identifies their kind; here the stream is dispatched on that label and,
for application extensions, on the identifier/authentication code.
'''
import logging

from ..blocks import as_stream
from ..enum import Compliant, ExtensionLabel
from .application import ApplicationExtension
from .base import Extension
from .graphic_control import GraphicControlExtension
from .netscape import AUTHENTICATION_CODE, IDENTIFIER, NetscapeExtension


logger = logging.getLogger(__name__)


APPLICATION_EXTENSIONS = {
    (IDENTIFIER, AUTHENTICATION_CODE): NetscapeExtension,
}


label2extension = {
    ExtensionLabel.APPLICATION.value: ApplicationExtension,
    ExtensionLabel.GRAPHIC_CONTROL.value: GraphicControlExtension,
}


def read_extension(stream, label: int, compliant=Compliant.NONE) -> Extension:
    '''Read the body of an extension, the stream must be positioned after its label.'''
    stream = as_stream(stream)

    extension_cls = label2extension.get(label)
    logger.debug('reading extension with label 0x%02x as %s' % (
        label, extension_cls.__name__ if extension_cls else 'generic'))

    if extension_cls is None:
        return Extension(label=label, stream=stream, compliant=compliant)

    extension = extension_cls(stream=stream, compliant=compliant)

    if isinstance(extension, ApplicationExtension):
        key = (extension.application_identifier, extension.application_authentication_code)
        specialized = APPLICATION_EXTENSIONS.get(key)
        if specialized:
            extension = specialized.from_application_extension(extension)

    return extension


__all__ = [
    'APPLICATION_EXTENSIONS',
    'ApplicationExtension',
    'Extension',
    'GraphicControlExtension',
    'NetscapeExtension',
    'read_extension',
]
