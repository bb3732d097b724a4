"""Failures raised while translating a single line of assembly."""


class EncodeError(ValueError):
    """Base class: the line could not be turned into an instruction word."""


class UnknownMnemonic(EncodeError):
    pass


class UnknownRegister(EncodeError):
    pass


class MalformedImmediate(EncodeError):
    pass


class ImmediateOutOfRange(MalformedImmediate):
    """The value parsed but does not fit the target field."""


class InsufficientOperands(EncodeError):
    pass
