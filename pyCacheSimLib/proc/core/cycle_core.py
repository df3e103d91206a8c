# File: pyCacheSimLib/proc/core/cycle_core.py
# --------------------------------------------------------------------
# Multi-cycle (unpipelined) core. Every instruction walks through the
# same phase state machine:
#
#   FETCH_INSTR -> DECODE_INSTR -> [CALCULATE_EA] -> FETCH_OPERANDS
#     -> [EXECUTE_INSTR] -> WRITE_BACK -> FETCH_INSTR ...
#
# Each phase handler returns the next phase. The machine halts as soon
# as a handler returns one of the terminal phases.
#
# Date  \ 18 Oct 2026

import enum

from pyCacheSimLib.arch.isa import cs16
from pyCacheSimLib.arch.isa.cs16 import Opcode
from pyCacheSimLib.config import NUM_REGS, DEFAULT_BRANCH_LIMIT
from pyCacheSimLib.errors import IllegalAddressError


class Phase(enum.IntEnum):
  FETCH_INSTR     = 0
  DECODE_INSTR    = 1
  CALCULATE_EA    = 2
  FETCH_OPERANDS  = 3
  EXECUTE_INSTR   = 4
  WRITE_BACK      = 5
  # Terminal phases
  ILLEGAL_OPCODE  = 6
  INFINITE_LOOP   = 7
  ILLEGAL_ADDRESS = 8

  @property
  def terminal(s):
    return s >= Phase.ILLEGAL_OPCODE


# Internal registers used for system operation. All of them are 16-bit,
# so every memory access is 16-bit as well.
class ProcState():
  def __init__(s):
    s.pc  = 0
    s.mar = 0
    s.mdr = 0
    s.ir  = bytearray(2)

    # ALU inputs (x, y) and output (z)
    s.alu_x = 0
    s.alu_y = 0
    s.alu_z = 0

  def irWord(s):
    return (s.ir[0] << 8) | s.ir[1]


class CycleCore():
  def __init__(s, branch_limit = DEFAULT_BRANCH_LIMIT):
    s.state = ProcState()

    # Registers use host integers; the big-endian mapping happens at
    # the memory boundary.
    s.rf = [0 for _ in range(NUM_REGS)]

    # Infinite loop guard, shared by jumps and taken branches
    s.branch_count = 0
    s.branch_limit = branch_limit

    # Memory interface
    s.iMemRead  = None
    s.dMemRead  = None
    s.dMemWrite = None

    # State machine
    s.phase = Phase.FETCH_INSTR
    s.control_unit = {
      Phase.FETCH_INSTR    : s.f,
      Phase.DECODE_INSTR   : s.d,
      Phase.CALCULATE_EA   : s.a,
      Phase.FETCH_OPERANDS : s.o,
      Phase.EXECUTE_INSTR  : s.x,
      Phase.WRITE_BACK     : s.w,
    }

    # Stats and flags
    s.cycle_count = 0
    s.inst_count  = 0
    s.inst_c      = False

    # Linetrace
    s.lt_array = []
    s.lt_buf   = ''

  # Configure memory calls
  def setIMemRead(s, iMemRead):
    s.iMemRead  = iMemRead
  def setDMemRead(s, dMemRead):
    s.dMemRead  = dMemRead
  def setDMemWrite(s, dMemWrite):
    s.dMemWrite = dMemWrite

  # Flags
  def halted(s):
    return s.phase.terminal
  def instCompletionFlag(s):
    return s.inst_c

  def getExitStatus(s):
    return s.halted(), s.phase

  #=====================================================================
  # Aux methods and functions
  #=====================================================================
  def opcode(s):
    return cs16.opcode(s.state.ir)

  def mode(s):
    return cs16.mode(s.state.ir)

  def get_reg1(s):
    return cs16.reg1(s.state.ir)

  def get_reg2(s):
    return cs16.reg2(s.state.ir)

  def extract_literal(s):
    return cs16.literal(s.state.ir)

  def count_branch(s):
    s.branch_count += 1
    return s.branch_count > s.branch_limit

  #=====================================================================
  # Fetch
  #=====================================================================
  def f(s):
    st = s.state

    # Goes through MAR/MDR the way the CPU would
    try:
      st.mar = st.pc
      word   = s.iMemRead(st.mar)
    except IllegalAddressError:
      s.lt_array.append(f"{st.pc:04x} ----")
      return Phase.ILLEGAL_ADDRESS

    st.mdr   = (word[0] << 8) | word[1]
    st.ir[0] = st.mdr >> 8
    st.ir[1] = st.mdr & 0xff

    s.lt_array.append(f"{st.pc:04x} {st.irWord():04x}")
    return Phase.DECODE_INSTR

  #=====================================================================
  # Decode
  #=====================================================================
  def d(s):
    op = s.opcode()
    md = s.mode()
    rc = Phase.FETCH_OPERANDS

    if op in cs16.ALU_OPCODES or op == Opcode.SHIFT:
      # Valid modes are 000b and 001b
      if md > 1:
        rc = Phase.ILLEGAL_OPCODE
    elif op == Opcode.MOVE:
      # Invalid if the second bit is set
      if md & 0x02:
        rc = Phase.ILLEGAL_OPCODE
      else:
        rc = Phase.CALCULATE_EA
    elif op == Opcode.BRANCH:
      # All ones is reserved
      if md == 0x07:
        rc = Phase.ILLEGAL_OPCODE
    else:
      rc = Phase.ILLEGAL_OPCODE

    s.lt_array.append(f"{Opcode(op).name:<6} m{md}")
    return rc

  #=====================================================================
  # Effective Address
  #=====================================================================
  def a(s):
    md  = s.mode()
    reg = None

    # First operand holds the address
    if md & 0x04:
      reg = s.get_reg1()
    # Second operand holds the address
    elif md & 0x01:
      reg = s.get_reg2()

    if reg is not None:
      s.state.mar = s.rf[reg]

    s.lt_array.append(f"ea {s.state.mar:04x}")
    return Phase.FETCH_OPERANDS

  #=====================================================================
  # Operand Fetch
  #=====================================================================
  def o(s):
    st = s.state
    op = s.opcode()
    md = s.mode()
    rc = Phase.EXECUTE_INSTR

    # Operand 1 is register contents, unless MOVE where it is the
    # destination.
    if op != Opcode.MOVE:
      st.alu_x = s.rf[s.get_reg1()]

    reg = s.get_reg2()

    if op in cs16.ALU_OPCODES:
      if md == 0:
        st.alu_y = s.extract_literal()
      else:
        st.alu_y = s.rf[reg]

    # No ALU work for a MOVE; the value always goes through the MDR
    elif op == Opcode.MOVE:
      rc = Phase.WRITE_BACK

      if (md & 0x01) == 0:
        st.mdr = s.extract_literal()
      elif md & 0x04:
        st.mdr = s.rf[reg]
      else:
        try:
          st.mdr = s.dMemRead(st.mar)
        except IllegalAddressError:
          rc = Phase.ILLEGAL_ADDRESS

    # Displacement, ignored for jumps
    elif op == Opcode.BRANCH:
      st.alu_y = s.extract_literal()

    s.lt_array.append(f"x={st.alu_x:04x} y={st.alu_y:04x} mdr={st.mdr:04x}")
    return rc

  #=====================================================================
  # Execute
  #=====================================================================
  def x(s):
    st = s.state
    op = s.opcode()
    md = s.mode()
    rc = Phase.WRITE_BACK

    if   op == Opcode.ADD:
      st.alu_z = (cs16.signed(st.alu_x) + cs16.signed(st.alu_y)) & 0xffff
    elif op == Opcode.SUB:
      st.alu_z = (cs16.signed(st.alu_x) - cs16.signed(st.alu_y)) & 0xffff
    elif op == Opcode.AND:
      st.alu_z = st.alu_x & st.alu_y
    elif op == Opcode.OR:
      st.alu_z = st.alu_x | st.alu_y
    elif op == Opcode.XOR:
      st.alu_z = st.alu_x ^ st.alu_y
    elif op == Opcode.SHIFT:
      if md == 0:
        st.alu_z = st.alu_x >> 1
      else:
        st.alu_z = (st.alu_x << 1) & 0xffff

    elif op == Opcode.BRANCH:
      if md == cs16.JUMP:
        st.alu_z = st.alu_x
        if s.count_branch():
          rc = Phase.INFINITE_LOOP
      else:
        lhs = cs16.signed(st.alu_x)
        rhs = cs16.signed(s.rf[0])

        if   md == cs16.BEQ: taken = lhs == rhs
        elif md == cs16.BNE: taken = lhs != rhs
        elif md == cs16.BLT: taken = lhs <  rhs
        elif md == cs16.BGT: taken = lhs >  rhs
        elif md == cs16.BLE: taken = lhs <= rhs
        elif md == cs16.BGE: taken = lhs >= rhs
        else:                taken = False

        # The PC is always written back; it only moves when taken
        if taken:
          st.alu_z = (st.pc + st.alu_y - 1) & 0xffff
          if s.count_branch():
            rc = Phase.INFINITE_LOOP
        else:
          st.alu_z = st.pc

    s.lt_array.append(f"z={st.alu_z:04x}")
    return rc

  #=====================================================================
  # Write Back
  #=====================================================================
  def w(s):
    st  = s.state
    op  = s.opcode()
    reg = s.get_reg1()
    rc  = Phase.FETCH_INSTR

    if op in cs16.ALU_OPCODES or op == Opcode.SHIFT:
      s.rf[reg] = st.alu_z
      lt = f"r{reg}={st.alu_z:04x}"

    # No branch simply rewrites the current PC
    elif op == Opcode.BRANCH:
      st.pc = st.alu_z
      lt = f"pc={st.alu_z:04x}"

    elif op == Opcode.MOVE:
      if s.mode() & 0x04:
        lt = f"[{st.mar:04x}]={st.mdr:04x}"
        try:
          s.dMemWrite(st.mar, st.mdr)
        except IllegalAddressError:
          rc = Phase.ILLEGAL_ADDRESS
      else:
        s.rf[reg] = st.mdr
        lt = f"r{reg}={st.mdr:04x}"

    # The PC advances even right after a branch wrote it
    st.pc = (st.pc + 1) & 0xffff

    s.lt_array.append(lt)
    return rc

  #=====================================================================
  # Tick
  #=====================================================================
  # Runs one phase of the state machine
  def tick(s):
    s.inst_c = False
    if s.halted():
      return

    if s.phase == Phase.FETCH_INSTR:
      s.lt_array = []

    s.phase = s.control_unit[s.phase]()
    s.cycle_count += 1

    # Instruction boundary
    if s.phase == Phase.FETCH_INSTR or s.phase.terminal:
      if s.phase == Phase.FETCH_INSTR:
        s.inst_count += 1
      s.inst_c = True
      s.lt_buf = ' | '.join(s.lt_array)

  # Runs phases until the current instruction retires or the core halts
  def step(s):
    if s.halted():
      return
    s.tick()
    while not s.inst_c:
      s.tick()

  def linetrace(s):
    return s.lt_buf
