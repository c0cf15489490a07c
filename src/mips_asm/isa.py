'''
tabla formal del subconjunto MIPS (opcodes, funct, formas de operandos)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class ISpec:
    """Especificación de una instrucción del subconjunto MIPS.

    - fmt: 'R', 'I' o 'J' (formato de la palabra de 32 bits)
    - opcode: campo de 6 bits (bits 31..26)
    - funct: campo de 6 bits, sólo en formato R
    - form: forma de operandos aceptada por el parser
    """
    fmt: str
    opcode: int
    funct: Optional[int] = None
    form: str = "none"

# Constantes de opcode
OP_SPECIAL = 0x00   # formato R y break
OP_J       = 0x02
OP_BEQ     = 0x04
OP_BNE     = 0x05
OP_ADDI    = 0x08
OP_ADDIU   = 0x09
OP_LUI     = 0x0F
OP_LW      = 0x23
OP_SW      = 0x2B

# Campo de dirección fijo que emite 'break'
BREAK_CODE = 0xD

# Formas de operandos
FORM_R      = "rd,rs,rt"
FORM_BRANCH = "rs,rt,offset"
FORM_ARITH  = "rt,rs,imm"
FORM_MEM    = "rt,mem"
FORM_UPPER  = "rt,imm"
FORM_TARGET = "target"
FORM_NONE   = "none"

SPEC: Dict[str, ISpec] = {
    # Tipo R (opcode 0, funct distingue)
    "add":   ISpec("R", OP_SPECIAL, funct=0x20, form=FORM_R),
    "addu":  ISpec("R", OP_SPECIAL, funct=0x21, form=FORM_R),
    "sub":   ISpec("R", OP_SPECIAL, funct=0x22, form=FORM_R),
    "subu":  ISpec("R", OP_SPECIAL, funct=0x23, form=FORM_R),
    "and":   ISpec("R", OP_SPECIAL, funct=0x24, form=FORM_R),
    "or":    ISpec("R", OP_SPECIAL, funct=0x25, form=FORM_R),
    "nor":   ISpec("R", OP_SPECIAL, funct=0x27, form=FORM_R),
    "slt":   ISpec("R", OP_SPECIAL, funct=0x2A, form=FORM_R),

    # Tipo I: saltos condicionales (relativos al PC)
    "beq":   ISpec("I", OP_BEQ, form=FORM_BRANCH),
    "bne":   ISpec("I", OP_BNE, form=FORM_BRANCH),

    # Tipo I: aritmética con inmediato
    "addi":  ISpec("I", OP_ADDI, form=FORM_ARITH),
    "addiu": ISpec("I", OP_ADDIU, form=FORM_ARITH),

    # Tipo I: memoria
    "lw":    ISpec("I", OP_LW, form=FORM_MEM),
    "sw":    ISpec("I", OP_SW, form=FORM_MEM),

    # Tipo I: carga de la mitad alta
    "lui":   ISpec("I", OP_LUI, form=FORM_UPPER),

    # Tipo J
    "j":     ISpec("J", OP_J, form=FORM_TARGET),
    "break": ISpec("J", OP_SPECIAL, form=FORM_NONE),
}

def spec(mnemonic: str) -> ISpec:
    """Devuelve la especificación de una instrucción por mnemónico."""
    m = mnemonic.lower()
    if m not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[m]

def is_mnemonic(token: str) -> bool:
    return token.lower() in SPEC
