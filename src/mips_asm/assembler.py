from __future__ import annotations
import argparse, sys
from dataclasses import dataclass
from typing import List

from .ast import SourceLine
from .lexer import lex
from .linker import LinkResult, first_pass
from .parser import ParseResult, parse
from .encoding import EncodeResult, encode
from .writers import FORMATTERS, render, write
from .diagnostics import Diagnostic, error, sorted_by_location

@dataclass(frozen=True)
class Assembly:
    lines: List[SourceLine]
    link: LinkResult
    parsed: ParseResult
    enc: EncodeResult
    diagnostics: List[Diagnostic]

def assemble_text(text: str, *, filename: str | None = None,
                  base_text: int = 0x0000_0000, compact: bool = False) -> Assembly:
    """Lexer, PASADA 1 (símbolos) y PASADA 2 (parseo + codificación).
    Los diagnósticos de todas las etapas se devuelven juntos, ordenados por línea."""
    lines, diags_lex = lex(text, filename=filename)
    link = first_pass(lines, base_text=base_text, filename=filename)
    parsed = parse(lines, link, filename=filename)
    enc = encode(parsed.items, compact=compact, text_base=base_text)
    diags = sorted_by_location(list(diags_lex) + list(link.diagnostics) + list(parsed.diagnostics))
    return Assembly(lines=lines, link=link, parsed=parsed, enc=enc, diagnostics=diags)

def _int_literal(s: str) -> int:
    try:
        return int(s, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"dirección inválida: {s}")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="MIPS subset two-pass assembler")
    ap.add_argument("source", help="archivo .asm/.s de entrada")
    ap.add_argument("-o", "--output", help="archivo de salida (por defecto, stdout)")
    ap.add_argument("-f", "--format", choices=sorted(FORMATTERS), default="listing",
                    help="listing: 'dirección<TAB>palabra'; hex/bin: sólo palabras")
    ap.add_argument("--base", type=_int_literal, default=0,
                    help="dirección de la primera instrucción (p.ej. 0xbfc00000)")
    ap.add_argument("--compact", action="store_true",
                    help="numerar direcciones sin huecos por líneas omitidas")
    ap.add_argument("--strict", action="store_true",
                    help="fallar (código 1) si hay cualquier diagnóstico")
    args = ap.parse_args(argv)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        print(error(f"no pude leer el archivo: {ex}", file=args.source), file=sys.stderr)
        return 2

    asm = assemble_text(text, filename=args.source, base_text=args.base, compact=args.compact)

    for d in asm.diagnostics:
        print(d, file=sys.stderr)

    if args.strict and asm.diagnostics:
        return 1

    if args.output is None:
        sys.stdout.write(render(asm.enc.words, args.format))
        return 0

    try:
        write(asm.enc.words, args.output, args.format)
    except OSError as ex:
        print(error(f"no pude escribir la salida: {ex}", file=args.output), file=sys.stderr)
        return 3

    print(f"OK: {len(asm.enc.words)} instrucciones → {args.output}", file=sys.stderr)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
