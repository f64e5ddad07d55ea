from enum import Enum, Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE   = 0
    ENUM   = 1 << 0
    MAGIC  = 1 << 1
    STATUS = 1 << 2


class ErrorState(Flag):
    '''Non-exclusive soft status that a component can collect while it is built.

    None of these aborts the construction: the component is returned anyway and
    it's up to the caller to decide what to do with it.'''
    OK                            = 0
    END_OF_INPUT_STREAM           = 1 << 0
    IDENTIFICATION_BLOCK_TOO_LONG = 1 << 1
    BAD_SIGNATURE                 = 1 << 2
    BAD_VERSION                   = 1 << 3
    BLOCK_TERMINATOR_MISSING      = 1 << 4
    UNKNOWN_BLOCK_INTRODUCER      = 1 << 5
    UNKNOWN_DISPOSAL_METHOD       = 1 << 6
    TRAILER_MISSING               = 1 << 7
    LOOP_COUNT_UNSPECIFIED        = 1 << 8


class BlockIntroducer(Enum):
    EXTENSION = 0x21
    IMAGE     = 0x2c
    TRAILER   = 0x3b


class ExtensionLabel(Enum):
    PLAIN_TEXT      = 0x01
    GRAPHIC_CONTROL = 0xf9
    COMMENT         = 0xfe
    APPLICATION     = 0xff


class DisposalMethod(Enum):
    '''Values 4-7 of the field are reserved by GIF89a.'''
    UNSPECIFIED            = 0
    DO_NOT_DISPOSE         = 1
    RESTORE_TO_BACKGROUND  = 2
    RESTORE_TO_PREVIOUS    = 3
