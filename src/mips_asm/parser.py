# src/mips_asm/parser.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Type

from .ast import (
    Lexeme, SourceLine, Mnemonic, Register, Label, Number,
    OpenParen, CloseParen, Comma, Colon, Record, RInstr, IInstr, JInstr,
)
from .isa import (
    BREAK_CODE, FORM_R, FORM_BRANCH, FORM_ARITH, FORM_MEM, FORM_UPPER,
    FORM_TARGET, FORM_NONE,
)
from .linker import LinkResult
from .utils import mask
from .diagnostics import Diagnostic, warning

class ParseError(ValueError):
    """Fallo estructural en una línea; la línea se omite de la salida."""
    def __init__(self, message: str, *, col: Optional[int] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.col = col
        self.hint = hint

@dataclass(frozen=True)
class Parsed:
    """Instrucción estructurada junto a su dirección de layout y ubicación."""
    record: Record
    pc: int
    line: int
    col: int

@dataclass(frozen=True)
class ParseResult:
    items: List[Parsed]
    diagnostics: List[Diagnostic]

_PUNCT_TEXT = {Comma: "','", OpenParen: "'('", CloseParen: "')'", Colon: "':'"}

def _describe(lx: Optional[Lexeme]) -> str:
    if lx is None:
        return "fin de línea"
    if isinstance(lx, Register):
        return f"registro ${lx.num}"
    if isinstance(lx, Number):
        return f"número {lx.value}"
    if isinstance(lx, Label):
        return f"etiqueta '{lx.name}'"
    if isinstance(lx, Mnemonic):
        return f"mnemónico '{lx.name}'"
    return _PUNCT_TEXT.get(type(lx), repr(lx))

# ---------------- Cursor sobre los lexemas de una línea ----------------

class _Cursor:
    def __init__(self, lexemes: Sequence[Lexeme]):
        self._lx = lexemes
        self._i = 0

    def peek(self) -> Optional[Lexeme]:
        return self._lx[self._i] if self._i < len(self._lx) else None

    def next(self) -> Optional[Lexeme]:
        lx = self.peek()
        if lx is not None:
            self._i += 1
        return lx

    def expect(self, kind: Type, what: str) -> Lexeme:
        lx = self.next()
        if not isinstance(lx, kind):
            raise ParseError(f"Se esperaba {what}, se obtuvo {_describe(lx)}",
                             col=getattr(lx, "col", None))
        return lx

    def register(self) -> int:
        return self.expect(Register, "un registro").num

    def comma(self) -> None:
        self.expect(Comma, "','")

    def end(self) -> None:
        lx = self.peek()
        if lx is not None:
            raise ParseError(f"Sobran lexemas a partir de {_describe(lx)}", col=lx.col)

# ---------------- Operandos de dirección ----------------

def parse_addr(cur: _Cursor, symtab: Dict[str, int]) -> Tuple[int, int]:
    """Devuelve (registro base, valor) para las formas, en este orden:
    imm(reg), (reg), etiqueta, imm."""
    lx = cur.next()
    if isinstance(lx, Number):
        if isinstance(cur.peek(), OpenParen):
            cur.next()
            base = cur.register()
            cur.expect(CloseParen, "')'")
            return base, lx.value
        return 0, lx.value
    if isinstance(lx, OpenParen):
        base = cur.register()
        cur.expect(CloseParen, "')'")
        return base, 0
    if isinstance(lx, Label):
        if lx.name not in symtab:
            raise ParseError(f"Etiqueta no definida: {lx.name}", col=lx.col)
        return 0, symtab[lx.name]
    raise ParseError(f"Se esperaba una dirección, se obtuvo {_describe(lx)}",
                     col=getattr(lx, "col", None))

def _value(cur: _Cursor, symtab: Dict[str, int]) -> int:
    """Inmediato o etiqueta; no admite registro base distinto de $zero."""
    col = getattr(cur.peek(), "col", None)
    base, value = parse_addr(cur, symtab)
    if base != 0:
        raise ParseError("El operando no admite registro base", col=col,
                         hint="use un inmediato o una etiqueta")
    return value

# ---------------- Parser de una línea ----------------

def parse_line(line: SourceLine, symtab: Dict[str, int], pc: int = 0) -> Optional[Record]:
    """Convierte una línea en instrucción estructurada.

    Devuelve None si la línea sólo declara una etiqueta; lanza ParseError si
    la línea no encaja en la forma de su mnemónico. 'pc' es la dirección en
    bytes de la instrucción (sólo la usan beq/bne).
    """
    body = line.body()
    if not body:
        return None
    head = body[0]
    if not isinstance(head, Mnemonic):
        raise ParseError(f"Se esperaba un mnemónico, se obtuvo {_describe(head)}", col=head.col)

    sp = head.spec
    name = head.name
    cur = _Cursor(body[1:])

    if sp.form == FORM_R:
        rd = cur.register(); cur.comma()
        rs = cur.register(); cur.comma()
        rt = cur.register()
        cur.end()
        return RInstr(name, sp.opcode, rs=rs, rt=rt, rd=rd, shamt=0, funct=sp.funct or 0)

    if sp.form == FORM_BRANCH:
        rs = cur.register(); cur.comma()
        rt = cur.register(); cur.comma()
        target = _value(cur, symtab)
        cur.end()
        # desplazamiento = destino - (actual + 1), en instrucciones
        return IInstr(name, sp.opcode, rs=rs, rt=rt, imm=mask(~(pc >> 2) + target, 16))

    if sp.form == FORM_ARITH:
        rt = cur.register(); cur.comma()
        rs = cur.register(); cur.comma()
        imm = _value(cur, symtab)
        cur.end()
        return IInstr(name, sp.opcode, rs=rs, rt=rt, imm=mask(imm, 16))

    if sp.form == FORM_MEM:
        rt = cur.register(); cur.comma()
        base, offset = parse_addr(cur, symtab)
        cur.end()
        return IInstr(name, sp.opcode, rs=base, rt=rt, imm=mask(offset, 16))

    if sp.form == FORM_UPPER:
        rt = cur.register(); cur.comma()
        imm = _value(cur, symtab)
        cur.end()
        return IInstr(name, sp.opcode, rs=0, rt=rt, imm=mask(imm, 16))

    if sp.form == FORM_TARGET:
        target = _value(cur, symtab)
        cur.end()
        return JInstr(name, sp.opcode, address=mask(target, 26))

    if sp.form == FORM_NONE:
        cur.end()
        return JInstr(name, sp.opcode, address=BREAK_CODE)

    raise ParseError(f"Forma de operandos no soportada: {sp.form}", col=head.col)

def parse(lines: List[SourceLine], link: LinkResult, *, filename: Optional[str] = None) -> ParseResult:
    """Parsea todas las líneas; cada fallo se convierte en advertencia y la línea se omite."""
    items: List[Parsed] = []
    diags: List[Diagnostic] = []
    for ln in lines:
        pc = link.pcs.get(ln.line, link.text_base)
        try:
            rec = parse_line(ln, link.symtab, pc)
        except ParseError as ex:
            diags.append(warning(f"{ex.message}; se omite '{ln.text}'",
                                 line=ln.line, col=ex.col, file=filename, hint=ex.hint))
            continue
        if rec is not None:
            items.append(Parsed(record=rec, pc=pc, line=ln.line, col=ln.body()[0].col))
    return ParseResult(items=items, diagnostics=diags)
