# src/mips_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .ast import Record, RInstr, IInstr, JInstr
from .parser import Parsed
from .utils import u32, split_bits

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int     # u32
    pc: int       # dirección de esta instrucción
    line: int
    col: int
    mnemonic: str

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]

# ---------------- Helpers de empaquetado de bits ----------------

def _pack_R(opc: int, rs: int, rt: int, rd: int, shamt: int, funct: int) -> int:
    return u32((opc   & 0x3F) << 26 |
               (rs    & 0x1F) << 21 |
               (rt    & 0x1F) << 16 |
               (rd    & 0x1F) << 11 |
               (shamt & 0x1F) << 6  |
               (funct & 0x3F))

def _pack_I(opc: int, rs: int, rt: int, imm16: int) -> int:
    return u32((opc & 0x3F) << 26 |
               (rs  & 0x1F) << 21 |
               (rt  & 0x1F) << 16 |
               (imm16 & 0xFFFF))

def _pack_J(opc: int, addr26: int) -> int:
    return u32((opc & 0x3F) << 26 | (addr26 & 0x3FFFFFF))

# Rangos (hi, lo) de cada campo por formato
FIELDS = {
    "R": (("opcode", (31, 26)), ("rs", (25, 21)), ("rt", (20, 16)),
          ("rd", (15, 11)), ("shamt", (10, 6)), ("funct", (5, 0))),
    "I": (("opcode", (31, 26)), ("rs", (25, 21)), ("rt", (20, 16)), ("imm", (15, 0))),
    "J": (("opcode", (31, 26)), ("address", (25, 0))),
}

def split_fields(word: int, fmt: str) -> Dict[str, int]:
    """Separa una palabra en sus campos según el formato ('R', 'I' o 'J')."""
    names = [n for n, _ in FIELDS[fmt]]
    values = split_bits(word, tuple(r for _, r in FIELDS[fmt]))
    return dict(zip(names, values))

# ---------------- Codificador ----------------

def encode_record(rec: Record) -> int:
    """Función total: instrucción estructurada -> palabra de 32 bits."""
    if isinstance(rec, RInstr):
        return _pack_R(rec.opcode, rec.rs, rec.rt, rec.rd, rec.shamt, rec.funct)
    if isinstance(rec, IInstr):
        return _pack_I(rec.opcode, rec.rs, rec.rt, rec.imm)
    if isinstance(rec, JInstr):
        return _pack_J(rec.opcode, rec.address)
    raise TypeError(f"Registro de instrucción desconocido: {rec!r}")

def encode(parsed: Iterable[Parsed], *, compact: bool = False, text_base: int = 0x0000_0000) -> EncodeResult:
    """Codifica cada instrucción parseada.

    Por defecto cada palabra conserva la dirección que le dio la primera
    pasada, de modo que una línea omitida deja un hueco en la lista.
    Con compact=True las direcciones se renumeran desde text_base sin huecos.
    """
    words: List[Encoded] = []
    pc = text_base
    for p in parsed:
        addr = pc if compact else p.pc
        words.append(Encoded(word=encode_record(p.record), pc=addr, line=p.line,
                             col=p.col, mnemonic=p.record.mnemonic))
        pc += 4
    return EncodeResult(words=words)
