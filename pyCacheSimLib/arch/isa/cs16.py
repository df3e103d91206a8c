# File: pyCacheSimLib/arch/isa/cs16.py
# --------------------------------------------------------------------
# The 16-bit teaching ISA: opcodes, instruction fields and the
# instruction table used by the assembler.
#
#   IR[0] = oooo_mmmr   o: opcode (3b), m: mode (3b), r: reg1[3:2]
#   IR[1] = rrRR_RRll   r: reg1[1:0], R: reg2 (4b)
#                       6-bit literal overlaps reg2 and l (IR[1][5:0])
#
# Date  \ 18 Oct 2026

import enum

class Opcode(enum.IntEnum):
  ADD    = 0
  SUB    = 1
  AND    = 2
  OR     = 3
  XOR    = 4
  MOVE   = 5
  SHIFT  = 6
  BRANCH = 7

ALU_OPCODES = (Opcode.ADD, Opcode.SUB, Opcode.AND, Opcode.OR, Opcode.XOR)

# Branch modes
JUMP = 0
BEQ  = 1
BNE  = 2
BLT  = 3
BGT  = 4
BLE  = 5
BGE  = 6

#=======================================================================
# Field extraction
#=======================================================================
def opcode(ir):
  return ir[0] >> 5

def mode(ir):
  return (ir[0] >> 2) & 0x07

def reg1(ir):
  return (((ir[0] & 0x03) << 2) | (ir[1] >> 6)) & 0x0f

def reg2(ir):
  return (ir[1] >> 2) & 0x0f

def literal(ir):
  return sext(ir[1] & 0x3f, 6)

#=======================================================================
# Aux functions
#=======================================================================
def sext(data, sz=6):
  data = data & ((0x1 << sz) - 1)
  if data & (0x1 << (sz - 1)):
    data = data | (0xffff << sz)
  return data & 0xffff

def signed(val):
  sign = 0x8000 & val
  val  = 0x7fff & val
  return (-1 * sign) + val

def encode(op, md, r1, low6):
  hi = ((op & 0x07) << 5) | ((md & 0x07) << 2) | ((r1 >> 2) & 0x03)
  lo = ((r1 & 0x03) << 6) | (low6 & 0x3f)
  return bytes([hi, lo])

#=======================================================================
# Instruction table
#=======================================================================
# Each entry: opcode, then a map from operand syntax to mode.
#   r   register           [r] register indirect
#   i   6-bit literal       t  branch target (label or literal)
#   d   shift direction
def arch():
  insts = {}

  for op in ALU_OPCODES:
    insts[op.name] = {'opcode': op, 'syntax': {'r,i': 0, 'r,r': 1}}

  insts['SHIFT'] = {'opcode': Opcode.SHIFT, 'syntax': {'r,d': None}}
  insts['MOVE' ] = {'opcode': Opcode.MOVE,
                    'syntax': {'r,i': 0, 'r,[r]': 1, '[r],i': 4, '[r],r': 5}}

  insts['JUMP' ] = {'opcode': Opcode.BRANCH, 'syntax': {'r'  : JUMP}}
  insts['BEQ'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BEQ }}
  insts['BNE'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BNE }}
  insts['BLT'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BLT }}
  insts['BGT'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BGT }}
  insts['BLE'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BLE }}
  insts['BGE'  ] = {'opcode': Opcode.BRANCH, 'syntax': {'r,t': BGE }}

  return {'name': 'cs16', 'insts': insts}
