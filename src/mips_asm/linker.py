# src/mips_asm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

from .ast import SourceLine, Mnemonic
from .diagnostics import Diagnostic, warning

# Cada instrucción MIPS ocupa 4 bytes
INSTR_BYTES = 4

# ---------- Resultado de la pasada 1 ----------

@dataclass(frozen=True)
class LinkResult:
    """Tabla de símbolos y layout del programa.

    - symtab: etiqueta -> índice de instrucción (dirección en bytes >> 2)
    - pcs: número de línea -> dirección en bytes, sólo para líneas con instrucción
    """
    symtab: Dict[str, int]
    text_base: int
    text_size: int
    pcs: Dict[int, int]
    diagnostics: List[Diagnostic]

# ---------- Pasada 1 ----------

def first_pass(
    lines: List[SourceLine],
    *,
    base_text: int = 0x0000_0000,
    filename: Optional[str] = None,
) -> LinkResult:
    """Recorre las líneas una vez y fija la dirección de etiquetas e instrucciones.

    Tiene que terminar antes de parsear ninguna instrucción: un salto hacia
    una etiqueta definida más abajo se resuelve contra esta tabla.
    """
    symtab: Dict[str, int] = {}
    defined_at: Dict[str, int] = {}
    pcs: Dict[int, int] = {}
    diags: List[Diagnostic] = []
    lc = base_text

    for ln in lines:
        label = ln.label_decl()
        if label is not None:
            if label.name in symtab:
                diags.append(warning(
                    f"Etiqueta redefinida: {label.name}",
                    line=ln.line, col=label.col, file=filename,
                    hint=f"definida antes en la línea {defined_at[label.name]}; se usa la última",
                ))
            symtab[label.name] = lc >> 2
            defined_at[label.name] = ln.line

        body = ln.body()
        if body and isinstance(body[0], Mnemonic):
            pcs[ln.line] = lc
            lc += INSTR_BYTES

    return LinkResult(
        symtab=symtab,
        text_base=base_text,
        text_size=lc - base_text,
        pcs=pcs,
        diagnostics=diags,
    )
