'''
mapeos nombre ABI ↔ $N, validaciones, utilidades de registros
'''

from __future__ import annotations
from typing import Dict

# Mapeo de nombres ABI (sin '$') a su índice
ABI_TO_NUM: Dict[str, int] = {
    "zero": 0, "at": 1,
    "v0": 2, "v1": 3,
    "a0": 4, "a1": 5, "a2": 6, "a3": 7,
    "t0": 8, "t1": 9, "t2": 10, "t3": 11, "t4": 12, "t5": 13, "t6": 14, "t7": 15,
    "s0": 16, "s1": 17, "s2": 18, "s3": 19, "s4": 20, "s5": 21, "s6": 22, "s7": 23,
    "t8": 24, "t9": 25,
    "k0": 26, "k1": 27,
    "gp": 28, "sp": 29, "fp": 30, "s8": 30, "ra": 31,
}

def is_reg(token: str) -> bool:
    """Indica si el token representa un registro válido ($ABI, ABI o $N)."""
    try:
        normalize_reg(token)
        return True
    except ValueError:
        return False

def normalize_reg(token: str) -> str:
    """Devuelve el nombre canónico '$N' o lanza ValueError.

    Acepta '$t0' y 't0' (forma sin sigilo); la forma numérica sólo con sigilo
    ('$8'), porque un '8' a secas es un inmediato.
    """
    t = token.strip().lower()
    bare = t[1:] if t.startswith("$") else t
    if bare in ABI_TO_NUM:
        return f"${ABI_TO_NUM[bare]}"
    if t.startswith("$") and bare.isdigit():
        n = int(bare)
        if 0 <= n <= 31:
            return f"${n}"
    raise ValueError(f"Registro inválido: {token}")

def reg_num(token: str) -> int:
    """Devuelve el índice numérico 0..31 del registro."""
    return int(normalize_reg(token)[1:])
