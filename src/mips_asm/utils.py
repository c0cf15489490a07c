'''
 bit-twiddling (u32, máscaras de campo, split fields, etc.)
'''

from __future__ import annotations
from typing import Tuple

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF

def u32(x: int) -> int:
    """Fuerza el valor al rango de 32 bits sin signo."""
    return x & U32_MASK

def mask(x: int, bits: int) -> int:
    """Trunca x a sus 'bits' bits bajos (complemento a dos para negativos)."""
    if bits <= 0:
        raise ValueError("bits debe ser positivo")
    return x & ((1 << bits) - 1)

def fits_32(x: int) -> bool:
    """True si x es representable en 32 bits, con o sin signo."""
    return -(1 << 31) <= x < (1 << 32)

def to_bin32(x: int) -> str:
    """Representación binaria de 32 bits (cadena)."""
    return format(u32(x), "032b")

def to_hex32(x: int, *, prefix: bool = True) -> str:
    """Representación hexadecimal de 32 bits (cadena), con o sin prefijo 0x."""
    s = format(u32(x), "08x")
    return ("0x" + s) if prefix else s

def split_bits(value: int, positions: Tuple[Tuple[int, int], ...]) -> tuple[int, ...]:
    """Extrae campos de bits dados como rangos (hi, lo) inclusivos (base 0)."""
    out = []
    for hi, lo in positions:
        if hi < lo or hi < 0 or lo < 0:
            raise ValueError("rango de bits inválido")
        out.append(mask(value >> lo, hi - lo + 1))
    return tuple(out)
