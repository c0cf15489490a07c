import pytest
from src.mips_asm.ast import RInstr, IInstr, JInstr
from src.mips_asm.encoding import encode_record, split_fields
from src.mips_asm.isa import SPEC

def test_r_format_fields():
    word = encode_record(RInstr("add", 0, rs=9, rt=10, rd=8, shamt=0, funct=0x20))
    assert word == 0x012A4020
    assert split_fields(word, "R") == {
        "opcode": 0, "rs": 9, "rt": 10, "rd": 8, "shamt": 0, "funct": 0x20,
    }

def test_i_format_fields():
    word = encode_record(IInstr("lw", 0x23, rs=29, rt=8, imm=4))
    assert word == 0x8FA80004
    assert split_fields(word, "I") == {"opcode": 0x23, "rs": 29, "rt": 8, "imm": 4}

def test_j_format_masks_address():
    assert encode_record(JInstr("j", 0x2, address=0x3FFFFFF)) == 0x0BFFFFFF
    assert encode_record(JInstr("j", 0x2, address=1 << 26)) == 0x08000000
    assert encode_record(JInstr("break", 0, address=0xD)) == 0x0000000D

@pytest.mark.parametrize("mnem", sorted(m for m, sp in SPEC.items() if sp.fmt == "R"))
def test_every_r_type_keeps_table_bits(mnem):
    sp = SPEC[mnem]
    word = encode_record(RInstr(mnem, sp.opcode, rs=1, rt=2, rd=3, shamt=0, funct=sp.funct))
    f = split_fields(word, "R")
    assert (f["opcode"], f["funct"]) == (0, sp.funct)
    assert (f["rs"], f["rt"], f["rd"]) == (1, 2, 3)

@pytest.mark.parametrize("mnem", sorted(m for m, sp in SPEC.items() if sp.fmt == "I"))
def test_every_i_type_keeps_opcode(mnem):
    sp = SPEC[mnem]
    word = encode_record(IInstr(mnem, sp.opcode, rs=31, rt=17, imm=0xBEEF))
    assert split_fields(word, "I") == {"opcode": sp.opcode, "rs": 31, "rt": 17, "imm": 0xBEEF}

def test_encoder_rejects_unknown_record():
    with pytest.raises(TypeError):
        encode_record(("add", 1, 2, 3))

@pytest.mark.parametrize("rec, fields", [
    (JInstr("j", 0x2, address=0x123456), {"opcode": 0x2, "address": 0x123456}),
    (JInstr("break", 0, address=0xD), {"opcode": 0, "address": 0xD}),
])
def test_j_format_fields(rec, fields):
    assert split_fields(encode_record(rec), "J") == fields
