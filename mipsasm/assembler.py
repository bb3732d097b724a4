# Single-pass translator for the MIPS subset in isa.py.
# Every call is independent: the only data consulted are the read-only tables
# in isa.py, so translate() may be shared freely between threads.

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from . import isa
from .errors import (
    EncodeError, ImmediateOutOfRange, InsufficientOperands,
    MalformedImmediate, UnknownMnemonic, UnknownRegister,
)
from .isa import Format

logger = logging.getLogger(__name__)

# tokens needed per format, mnemonic included
ARITY = {
    Format.R: 4,        # op rd rs rt
    Format.R_SHIFT: 4,  # op rd rt shamt
    Format.I: 4,        # op rt rs imm  /  op rt imm rs
}


def tokenize(line: str) -> List[str]:
    """Lowercase a source line, drop any '#' comment and split on whitespace."""
    return line.split('#')[0].lower().split()


def parse_reg(tok: str) -> int:
    tok = tok.strip().rstrip(',')
    idx = isa.lookup_register(tok)
    if idx is None:
        raise UnknownRegister(f"Unknown register '{tok}'")
    return idx

def parse_imm(tok: str) -> int:
    tok = tok.strip().rstrip(',')
    try:
        if tok.lstrip('+-').lower().startswith("0x"):
            return int(tok, 16)
        return int(tok, 10)
    except ValueError:
        raise MalformedImmediate(f"Bad immediate '{tok}'") from None

def parse_offset_addr(tok: str) -> Tuple[int, int]:
    # format: imm(rs)
    tok = tok.strip().rstrip(',')
    if '(' in tok and tok.endswith(')'):
        imm_s, rs_s = tok.split('(', 1)
        rs_s = rs_s[:-1]
        return parse_imm(imm_s or "0"), parse_reg(rs_s)
    raise MalformedImmediate(f"Bad memory operand '{tok}' (want imm(rs))")


def _fit16(imm: int) -> int:
    """Signed or unsigned 16-bit values are both accepted, then masked."""
    if not isa.IMM_MIN <= imm <= isa.IMM_MAX:
        raise ImmediateOutOfRange(
            f"Immediate {imm} does not fit in 16 bits ({isa.IMM_MIN}..{isa.IMM_MAX})")
    return imm & isa.IMM_MASK

def _imm16(tok: str) -> int:
    return _fit16(parse_imm(tok))

def _shamt(tok: str) -> int:
    shamt = parse_imm(tok)
    if not 0 <= shamt <= isa.SHAMT_MAX:
        raise ImmediateOutOfRange(f"Shift amount {shamt} out of range (0..{isa.SHAMT_MAX})")
    return shamt


def _require(tokens: Sequence[str], n: int, fmt: Format):
    if not tokens:
        raise InsufficientOperands("Empty instruction")
    if len(tokens) < n:
        raise InsufficientOperands(
            f"'{tokens[0]}' ({fmt.value}-format) needs {n - 1} operands, got {len(tokens) - 1}")


def classify(mnemonic: str) -> Format:
    """Return the encoding format of a mnemonic, Format.UNKNOWN if unsupported."""
    desc = isa.lookup_instruction(mnemonic)
    return desc.format if desc is not None else Format.UNKNOWN


def pack(fmt: Format, tokens: Sequence[str]) -> int:
    """Pack the operands of an already classified instruction into a word."""
    if not tokens:
        raise InsufficientOperands("Empty instruction")
    mn = tokens[0]
    desc = isa.lookup_instruction(mn)
    if fmt is Format.UNKNOWN or desc is None or desc.format is not fmt:
        raise UnknownMnemonic(f"Unknown mnemonic '{mn}'")

    if fmt is Format.R:
        _require(tokens, ARITY[fmt], fmt)
        rd, rs, rt = parse_reg(tokens[1]), parse_reg(tokens[2]), parse_reg(tokens[3])
        return isa.encode_r(rs, rt, rd, 0, desc.code)

    if fmt is Format.R_SHIFT:
        _require(tokens, ARITY[fmt], fmt)
        rd, rt = parse_reg(tokens[1]), parse_reg(tokens[2])
        shamt = _shamt(tokens[3])
        return isa.encode_r(0, rt, rd, shamt, desc.code)

    # I-format
    if mn in isa.MEMORY_OPS:
        if len(tokens) == 3 and '(' in tokens[2]:
            # lw rt imm(rs)
            rt = parse_reg(tokens[1])
            imm, rs = parse_offset_addr(tokens[2])
            imm = _fit16(imm)
        else:
            # lw rt imm rs
            _require(tokens, ARITY[fmt], fmt)
            rt, imm, rs = parse_reg(tokens[1]), _imm16(tokens[2]), parse_reg(tokens[3])
    else:
        _require(tokens, ARITY[fmt], fmt)
        rt, rs, imm = parse_reg(tokens[1]), parse_reg(tokens[2]), _imm16(tokens[3])
    return isa.encode_i(desc.code, rs, rt, imm)


def translate(tokens: Sequence[str]) -> int:
    """Translate one tokenized instruction into its 32-bit machine word.

    Raises an EncodeError subclass when the line cannot be encoded; no
    placeholder word is ever returned.
    """
    if not tokens:
        raise InsufficientOperands("Empty instruction")
    fmt = classify(tokens[0])
    if fmt is Format.UNKNOWN:
        raise UnknownMnemonic(f"Unknown mnemonic '{tokens[0]}'")
    word = pack(fmt, tokens)
    logger.debug("%s (%s) -> 0x%08x", tokens, fmt.value, word)
    return word


@dataclass
class LineResult:
    line_num: int
    source: str
    word: Optional[int] = None
    format: Format = Format.UNKNOWN
    error: Optional[EncodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def translate_line(line: str, line_num: int = 1) -> Optional[LineResult]:
    """Tokenize and translate one source line; None for blank/comment lines."""
    tokens = tokenize(line)
    if not tokens:
        return None
    res = LineResult(line_num=line_num, source=line.rstrip('\n'), format=classify(tokens[0]))
    try:
        res.word = translate(tokens)
    except EncodeError as e:
        logger.debug("line %d: %s", line_num, e)
        res.error = e
    return res


def assemble(lines: Iterable[str]) -> List[LineResult]:
    """Translate every non-blank line, keeping failures alongside the words."""
    results = []
    for line_num, line in enumerate(lines, 1):
        res = translate_line(line, line_num)
        if res is not None:
            results.append(res)
    return results
