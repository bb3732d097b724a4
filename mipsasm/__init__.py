from .assembler import assemble, classify, pack, tokenize, translate
from .errors import (
    EncodeError, ImmediateOutOfRange, InsufficientOperands,
    MalformedImmediate, UnknownMnemonic, UnknownRegister,
)
from .isa import Format, InstructionDescriptor, lookup_instruction, lookup_register

__version__ = "0.1.0"
