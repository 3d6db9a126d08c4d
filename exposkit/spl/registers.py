"""Register numbering of the machine targeted by the SPL compiler."""

from enum import IntEnum

NUM_GEN_REG = 20
NUM_PORTS = 4
NUM_SPECIAL_REG = 10
C_REG_BASE = 16
REG_NAME_MAX_LEN = 5


class Register(IntEnum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    R8 = 8
    R9 = 9
    R10 = 10
    R11 = 11
    R12 = 12
    R13 = 13
    R14 = 14
    R15 = 15
    R16 = 16
    R17 = 17
    R18 = 18
    R19 = 19
    P0 = 20
    P1 = 21
    P2 = 22
    P3 = 23
    BP = 24
    IP = 25
    SP = 26
    PTBR = 27
    PTLR = 28
    EIP = 29
    EPN = 30
    EC = 31
    EMA = 32
    CORE = 33


_SPECIAL = {
    Register.BP, Register.SP, Register.IP, Register.PTBR, Register.PTLR,
    Register.EIP, Register.EPN, Register.EC, Register.EMA, Register.CORE,
}


def is_allowed_register(value) -> bool:
    """Whether SPL programs may use this register (R0 to R15)."""
    return Register.R0 <= value < Register.R0 + C_REG_BASE


def register_name(value) -> str:
    """Assembly name of a register that SPL programs may refer to."""
    if Register.R0 <= value <= Register.R15:
        return f"R{value - Register.R0}"
    if Register.P0 <= value <= Register.P3:
        return f"P{value - Register.P0}"
    if value in _SPECIAL:
        return Register(value).name
    raise ValueError(f"no register name for {value}")