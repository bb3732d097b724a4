from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

# MIPS encodings (we store plain ints)
# R-type:       opcode(6)=0 | rs(5) | rt(5) | rd(5) | shamt(5)=0 | funct(6)
# R-shift-type: opcode(6)=0 | rs(5)=0 | rt(5) | rd(5) | shamt(5) | funct(6)
# I-type:       opcode(6)   | rs(5) | rt(5) | imm(16)
#
# Supported mnemonics: add, sub, and, or, nor, sll, srl, sra,
#                      addi, andi, ori, lw, sw, beq, bne

OP_RTYPE = 0x00

FUNCT_ADD = 0x20
FUNCT_SUB = 0x22
FUNCT_AND = 0x24
FUNCT_OR  = 0x25
FUNCT_NOR = 0x27

FUNCT_SLL = 0x00
FUNCT_SRL = 0x02
FUNCT_SRA = 0x03

OP_ADDI = 0x08
OP_ANDI = 0x0C
OP_ORI  = 0x0D
OP_LW   = 0x23
OP_SW   = 0x2B
OP_BEQ  = 0x04
OP_BNE  = 0x05

SHAMT_MAX  = 0x1F
IMM_MASK   = 0xFFFF
IMM_MIN    = -0x8000   # most negative signed 16-bit value
IMM_MAX    = 0xFFFF    # largest unsigned 16-bit value


class Format(Enum):
    R = "R"
    R_SHIFT = "R-shift"
    I = "I"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class InstructionDescriptor:
    mnemonic: str
    format: Format
    code: int  # funct for R / R-shift, opcode for I

    @property
    def opcode(self) -> int:
        """Value of bits 26-31; R and R-shift instructions share opcode 0."""
        return self.code if self.format is Format.I else OP_RTYPE


def _table(*entries) -> Dict[str, InstructionDescriptor]:
    return {m: InstructionDescriptor(m, fmt, code) for m, fmt, code in entries}


INSTRUCTIONS: Dict[str, InstructionDescriptor] = _table(
    ("add",  Format.R, FUNCT_ADD),
    ("sub",  Format.R, FUNCT_SUB),
    ("and",  Format.R, FUNCT_AND),
    ("or",   Format.R, FUNCT_OR),
    ("nor",  Format.R, FUNCT_NOR),

    ("sll",  Format.R_SHIFT, FUNCT_SLL),
    ("srl",  Format.R_SHIFT, FUNCT_SRL),
    ("sra",  Format.R_SHIFT, FUNCT_SRA),

    ("addi", Format.I, OP_ADDI),
    ("andi", Format.I, OP_ANDI),
    ("ori",  Format.I, OP_ORI),
    ("lw",   Format.I, OP_LW),
    ("sw",   Format.I, OP_SW),
    ("beq",  Format.I, OP_BEQ),
    ("bne",  Format.I, OP_BNE),
)

# lw/sw take their operands as rt, offset, base
MEMORY_OPS = frozenset({"lw", "sw"})

REG_NAMES = {
    0: "zero", 1: "at",
    2: "v0", 3: "v1",
    4: "a0", 5: "a1", 6: "a2", 7: "a3",
    8: "t0", 9: "t1", 10: "t2", 11: "t3", 12: "t4", 13: "t5", 14: "t6", 15: "t7",
    16: "s0", 17: "s1", 18: "s2", 19: "s3", 20: "s4", 21: "s5", 22: "s6", 23: "s7",
    24: "t8", 25: "t9",
    26: "k0", 27: "k1",
    28: "gp", 29: "sp", 30: "fp", 31: "ra",
}

REGISTERS: Dict[str, int] = {name: idx for idx, name in REG_NAMES.items()}


def lookup_instruction(mnemonic: str) -> Optional[InstructionDescriptor]:
    """Return the descriptor for an exact (lowercase) mnemonic, or None."""
    return INSTRUCTIONS.get(mnemonic)


def lookup_register(name: str) -> Optional[int]:
    """Map a register name such as 't0' or '$t0' to its index, or None."""
    if name.startswith("$"):
        name = name[1:]
    return REGISTERS.get(name)


def encode_r(rs, rt, rd, shamt, funct):
    """Build an R-type instruction word from its fields."""
    return (OP_RTYPE << 26) | (rs << 21) | (rt << 16) | (rd << 11) | (shamt << 6) | funct

def encode_i(op, rs, rt, imm):
    """Build an I-type instruction word with a 16-bit immediate."""
    imm &= IMM_MASK
    return (op << 26) | (rs << 21) | (rt << 16) | imm
