from __future__ import annotations
from typing import Iterable, List
from .utils import to_hex32, to_bin32
from .encoding import Encoded

def to_listing_lines(words: Iterable[Encoded]) -> List[str]:
    """'0xDIRECCION<TAB>0xPALABRA' por instrucción."""
    return [f"{to_hex32(w.pc)}\t{to_hex32(w.word)}" for w in words]

def to_hex_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_hex32(w.word) for w in words]

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_bin32(w.word) for w in words]

FORMATTERS = {
    "listing": to_listing_lines,
    "hex": to_hex_lines,
    "bin": to_bin_lines,
}

def render(words: Iterable[Encoded], fmt: str = "listing") -> str:
    return "".join(line + "\n" for line in FORMATTERS[fmt](words))

def write(words: Iterable[Encoded], path: str, fmt: str = "listing") -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render(words, fmt))
