import pytest
from src.mips_asm.lexer import lex, lex_line
from src.mips_asm.linker import first_pass
from src.mips_asm.parser import parse, parse_line, ParseError
from src.mips_asm.ast import SourceLine, RInstr, IInstr, JInstr

def _line(text, lineno=1):
    lexemes, _ = lex_line(text, lineno)
    return SourceLine(line=lineno, text=text, lexemes=lexemes)

def _one(text, symtab=None, pc=0):
    return parse_line(_line(text), symtab or {}, pc)

def test_r_type_operand_order():
    rec = _one("add $t0, $t1, $t2")
    assert rec == RInstr("add", 0, rs=9, rt=10, rd=8, shamt=0, funct=0x20)

def test_addi_negative_immediate_is_masked():
    rec = _one("addi $t0, $sp, -4")
    assert rec == IInstr("addi", 0x8, rs=29, rt=8, imm=0xFFFC)

@pytest.mark.parametrize("src, rs, imm", [
    ("lw $t0, 4($sp)", 29, 4),
    ("lw $t0, ($sp)", 29, 0),
    ("lw $t0, 16", 0, 16),
    ("sw $t0, dato", 0, 5),
])
def test_memory_address_forms(src, rs, imm):
    rec = _one(src, {"dato": 5})
    assert isinstance(rec, IInstr)
    assert (rec.rs, rec.rt, rec.imm) == (rs, 8, imm)

def test_lui_uses_zero_rs():
    assert _one("lui $t0, 0x1234") == IInstr("lui", 0xF, rs=0, rt=8, imm=0x1234)

def test_lui_rejects_base_register():
    with pytest.raises(ParseError, match="registro base"):
        _one("lui $t0, 4($sp)")

def test_branch_forward_and_backward_displacement():
    symtab = {"fwd": 5, "back": 0}
    fwd = _one("beq $t0, $t1, fwd", symtab, pc=8)     # índice 2
    back = _one("bne $t0, $t1, back", symtab, pc=8)
    assert fwd.imm == (~2 + 5) & 0xFFFF == 2
    assert back.imm == (~2 + 0) & 0xFFFF == 0xFFFD
    assert (fwd.rs, fwd.rt) == (8, 9)

def test_branch_literal_is_absolute_target():
    assert _one("beq $zero, $zero, 3", pc=0).imm == 2

def test_jump_absolute_and_masked():
    assert _one("j fin", {"fin": 7}) == JInstr("j", 0x2, address=7)
    assert _one("j 0x4000000").address == 0

def test_break_fixed_code():
    assert _one("break") == JInstr("break", 0, address=0xD)

@pytest.mark.parametrize("src, msg", [
    ("add $t0, $t1", "fin de línea"),
    ("add $t0 $t1, $t2", "','"),
    ("add $t0, $t1, 5", "registro"),
    ("add $t0, $t1, $t2, $t3", "Sobran"),
    ("break 1", "Sobran"),
    ("j nada", "no definida"),
    ("lw $t0, 4($sp", r"'\)'"),
    ("lw $t0, (4)", "registro"),
    ("beq $t0, $t1, ,", "dirección"),
    ("j", "dirección"),
    ("$t0, $t1", "mnemónico"),
])
def test_structural_failures(src, msg):
    with pytest.raises(ParseError, match=msg):
        _one(src)

def test_label_only_line_yields_nothing():
    assert _one("loop:") is None

def test_parse_reports_warning_and_skips_line():
    src = "add $t0, $t1\nadd $t0, $t1, $t2\n"
    lines, _ = lex(src)
    res = parse(lines, first_pass(lines), filename="p.s")
    assert [p.line for p in res.items] == [2]
    assert res.items[0].pc == 4
    assert len(res.diagnostics) == 1
    d = res.diagnostics[0]
    assert d.severity == "advertencia" and d.line == 1 and d.file == "p.s"
    assert "add $t0, $t1" in d.message

@pytest.mark.parametrize("src, pc", [
    ("addi $t0, $t1, L", 0),
    ("addi $t0, $t1, L", 40),
    ("addiu $t0, $t1, L", 0x1000),
])
def test_arith_label_is_absolute(src, pc):
    rec = _one(src, {"L": 1}, pc=pc)
    assert (rec.rs, rec.rt, rec.imm) == (9, 8, 1)

@pytest.mark.parametrize("src", [
    "addi $t0, $t1, 4($sp)",
    "addiu $t0, $t1, ($sp)",
    "beq $t0, $t1, 4($sp)",
    "bne $t0, $t1, ($gp)",
    "j 4($sp)",
])
def test_base_register_rejected(src):
    with pytest.raises(ParseError, match="registro base"):
        _one(src)
