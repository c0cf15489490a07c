'''
dataclases de lexemas (una línea de fuente) y de instrucciones estructuradas
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

from .isa import ISpec

# ---- Lexemas ----

@dataclass(frozen=True)
class Mnemonic:
    """Mnemónico reconocido, con su entrada de la tabla ISA."""
    name: str
    spec: ISpec
    col: int = 0

@dataclass(frozen=True)
class Register:
    """Registro ya resuelto a su índice 0..31."""
    num: int
    col: int = 0

@dataclass(frozen=True)
class Label:
    """Identificador que no es mnemónico ni registro (p.ej., 'loop')."""
    name: str
    col: int = 0

@dataclass(frozen=True)
class Number:
    """Literal entero con signo de 32 bits."""
    value: int
    col: int = 0

@dataclass(frozen=True)
class OpenParen:
    col: int = 0

@dataclass(frozen=True)
class CloseParen:
    col: int = 0

@dataclass(frozen=True)
class Comma:
    col: int = 0

@dataclass(frozen=True)
class Colon:
    col: int = 0

Lexeme = Union[Mnemonic, Register, Label, Number, OpenParen, CloseParen, Comma, Colon]

@dataclass(frozen=True)
class SourceLine:
    """Línea no vacía del fuente: número (base 1), texto y lexemas en orden textual."""
    line: int
    text: str
    lexemes: Tuple[Lexeme, ...]

    def label_decl(self) -> Union[Label, None]:
        """Etiqueta declarada al inicio ('name:'), si la hay."""
        lx = self.lexemes
        if len(lx) >= 2 and isinstance(lx[0], Label) and isinstance(lx[1], Colon):
            return lx[0]
        return None

    def body(self) -> Tuple[Lexeme, ...]:
        """Lexemas tras la declaración de etiqueta (la línea entera si no hay)."""
        return self.lexemes[2:] if self.label_decl() is not None else self.lexemes

# ---- Instrucciones estructuradas (campos ya resueltos y enmascarados) ----

@dataclass(frozen=True)
class RInstr:
    mnemonic: str
    opcode: int
    rs: int
    rt: int
    rd: int
    shamt: int
    funct: int

@dataclass(frozen=True)
class IInstr:
    mnemonic: str
    opcode: int
    rs: int
    rt: int
    imm: int      # 16 bits

@dataclass(frozen=True)
class JInstr:
    mnemonic: str
    opcode: int
    address: int  # 26 bits

Record = Union[RInstr, IInstr, JInstr]
