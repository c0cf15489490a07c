from __future__ import annotations
import re
from typing import List, Optional, Tuple

from .ast import (
    Lexeme, SourceLine, Mnemonic, Register, Label, Number,
    OpenParen, CloseParen, Comma, Colon,
)
from .isa import is_mnemonic, spec
from .regs import is_reg, reg_num
from .utils import fits_32, mask
from .diagnostics import Diagnostic, note, warning

COMMENT_SPLIT_RE = re.compile(r"(#|//)")

# word: optional minus + alnum/'$'/'_' run; punct: single , ( ) :
TOKEN_RE = re.compile(r"(?P<word>-?[$\w]+)|(?P<punct>[,():])|(?P<ws>\s+)|(?P<other>.)")

_PUNCT = {",": Comma, "(": OpenParen, ")": CloseParen, ":": Colon}

def strip_comment(line: str) -> str:
    """Remove comments starting with '#' or '//'"""
    return COMMENT_SPLIT_RE.split(line, maxsplit=1)[0].rstrip()

def parse_int(token: str) -> Optional[int]:
    """Parse a decimal/0x/0b/0o literal (optionally negative); None if it is not one."""
    # int(..., 0) would also take '1_0'
    if "_" in token:
        return None
    try:
        return int(token, 0)
    except ValueError:
        pass
    # int(..., 0) rejects leading zeros such as '08'
    if re.fullmatch(r"-?\d+", token):
        return int(token, 10)
    return None

def to_s32(value: int) -> int:
    """Fold to a signed 32-bit value (two's complement)."""
    v = mask(value, 32)
    return v - (1 << 32) if v & 0x80000000 else v

def classify(word: str, col: int) -> Lexeme:
    """Number, then mnemonic, then register; anything else is a Label."""
    value = parse_int(word)
    if value is not None:
        return Number(to_s32(value), col=col)
    if is_mnemonic(word):
        return Mnemonic(word.lower(), spec(word), col=col)
    if is_reg(word):
        return Register(reg_num(word), col=col)
    return Label(word, col=col)

def lex_line(text: str, lineno: int, *, filename: Optional[str] = None
             ) -> Tuple[Tuple[Lexeme, ...], List[Diagnostic]]:
    diags: List[Diagnostic] = []
    out: List[Lexeme] = []
    for m in TOKEN_RE.finditer(strip_comment(text)):
        col = m.start() + 1
        kind = m.lastgroup
        if kind == "word":
            lx = classify(m.group(), col)
            if isinstance(lx, Number) and not fits_32(parse_int(m.group())):
                diags.append(warning(f"Literal fuera de 32 bits, se trunca: {m.group()}",
                                     line=lineno, col=col, file=filename))
            out.append(lx)
        elif kind == "punct":
            out.append(_PUNCT[m.group()](col=col))
        elif kind == "other":
            diags.append(note(f"Carácter ignorado: '{m.group()}'",
                              line=lineno, col=col, file=filename))
    return tuple(out), diags

def lex(text: str, *, filename: Optional[str] = None) -> Tuple[List[SourceLine], List[Diagnostic]]:
    """Split the source into SourceLines, dropping lines with no lexemes."""
    lines: List[SourceLine] = []
    diags: List[Diagnostic] = []
    for lineno, raw in enumerate(text.split("\n"), start=1):
        lexemes, line_diags = lex_line(raw.rstrip("\r"), lineno, filename=filename)
        diags.extend(line_diags)
        if lexemes:
            lines.append(SourceLine(line=lineno, text=raw.strip(), lexemes=lexemes))
    return lines, diags
