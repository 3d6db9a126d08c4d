"""Assembly routines for heap initialisation, allocation and release."""


def _join(lines):
    return "".join(line + "\n" for line in lines)


def initialize_routine() -> str:
    """Routine that builds the free list of 16-word heap blocks."""
    return _join([
        "INITIALIZE:",
        "PUSH BP",
        "MOV BP, SP",
        "MOV R0,0",
        "MOV R1,1",
        "L0:",
        "MOV [R0],-1",
        "ADD R0,R1",
        "MOV R2,255",
        "GE R2,R0",
        "JZ R2,L1",
        "JMP L0",
        "L1:",
        "MOV R0,0",
        "MOV R1,16",
        "MOV R3,16",
        "L2:",
        "MOV [R0],R1",
        "ADD R1,R3",
        "ADD R0,R3",
        "MOV R2,255",
        "GE R2,R0",
        "JZ R2,L3",
        "JMP L2",
        "L3:",
        "MOV [240],-1",
        "MOV [256],0",
        "MOV BP, [SP]",
        "POP R0",
        "RET",
    ])


def alloc_routine() -> str:
    """Routine that takes the head of the free list and returns it at BP-2."""
    return _join([
        "ALLOC:",
        "PUSH BP",
        "MOV BP, SP",
        "MOV R0, [256]",
        "MOV R1, [R0]",
        "MOV [256], R1",
        "MOV R1, BP",
        "MOV R2, 2",
        "SUB R1, R2",
        "MOV [R1], R0",
        "MOV BP, [SP]",
        "POP R0",
        "RET",
    ])


def free_routine() -> str:
    """Routine that returns the block passed at BP-2 to the free list."""
    return _join([
        "FREE:",
        "PUSH BP",
        "MOV BP, SP",
        "MOV R0, 2",
        "MOV R1, BP",
        "SUB R1, R0",
        "MOV R0, [R1]",
        "MOV R1, [256]",
        "MOV [256], R0",
        "MOV [R0], R1",
        "MOV BP, [SP]",
        "POP R0",
        "RET",
    ])