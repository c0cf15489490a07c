import pytest
from src.mips_asm.regs import normalize_reg, reg_num, is_reg

def test_abi_bare_and_numeric():
    assert normalize_reg("$t0") == "$8"
    assert normalize_reg("T0") == "$8"
    assert reg_num("$sp") == 29
    assert reg_num("$fp") == reg_num("s8") == 30
    assert reg_num("$31") == 31
    assert is_reg("$zero") and is_reg("zero")

def test_invalid():
    with pytest.raises(ValueError):
        normalize_reg("$32")
    with pytest.raises(ValueError):
        normalize_reg("8")
    with pytest.raises(ValueError):
        normalize_reg("foo")
