# File: pyCacheSimLib/asm/assembler.py
# --------------------------------------------------------------------
# Two-pass assembler producing the object format the simulator loads:
# one big-endian 2-byte word per instruction.
#
#   pass 1: strip comments, assign every instruction a byte address and
#           record labels
#   pass 2: encode each instruction, resolving branch targets
#
# Date  \ 18 Oct 2026

import argparse
import logging
import os
import re
import sys

from pyCacheSimLib.arch.isa import cs16
from pyCacheSimLib.config   import WORD_SIZE, NUM_REGS, DEFAULT_CODE_WORDS
from pyCacheSimLib.errors   import AssemblerError

logger = logging.getLogger(__name__)

REG_RE   = re.compile(r'^[Rr](\d+)$')
MEM_RE   = re.compile(r'^\[\s*[Rr](\d+)\s*\]$')
LABEL_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

SHIFT_DIRS = {'RIGHT': 0, 'LEFT': 1}

LITERAL_MIN = -32
LITERAL_MAX =  31


class Instruction:
  def __init__(s, mnemonic, operands, address, line_no):
    s.mnemonic = mnemonic
    s.operands = operands
    s.address  = address
    s.line_no  = line_no

  def __repr__(s):
    return f"{s.address:04x}: {s.mnemonic} {', '.join(s.operands)}"


class Assembler:
  def __init__(s, code_words = DEFAULT_CODE_WORDS):
    s.arch       = cs16.arch()
    s.code_words = code_words
    s.labels     = {}
    s.insts      = []

  #=====================================================================
  # Pass 1
  #=====================================================================
  def firstPass(s, lines):
    address = 0
    for line_no, line in enumerate(lines, 1):
      line = line.split(';', 1)[0].strip()
      if not line:
        continue

      tokens = line.split(None, 1)
      if tokens[0].endswith(':'):
        label = tokens[0][:-1]
        if not LABEL_RE.match(label):
          raise AssemblerError(line_no, f"invalid label {label!r}")
        if label in s.labels:
          raise AssemblerError(line_no, f"duplicate label {label!r}")
        s.labels[label] = address

        # A label may sit on its own line
        if len(tokens) == 1:
          continue
        tokens = tokens[1].split(None, 1)

      mnemonic = tokens[0].upper()
      operands = []
      if len(tokens) > 1:
        operands = [op.strip() for op in tokens[1].split(',')]

      s.insts.append(Instruction(mnemonic, operands, address, line_no))
      address += WORD_SIZE

    if address > s.code_words * WORD_SIZE:
      raise AssemblerError(s.insts[-1].line_no, "program exceeds code memory")

  #=====================================================================
  # Pass 2
  #=====================================================================
  def operandKind(s, tok):
    if REG_RE.match(tok):             return 'r'
    if MEM_RE.match(tok):             return '[r]'
    if tok.upper() in SHIFT_DIRS:     return 'd'
    try:
      int(tok, 0)
      return 'i'
    except ValueError:
      pass
    if LABEL_RE.match(tok):           return 'l'
    return '?'

  def matchSyntax(s, inst):
    kinds = [s.operandKind(op) for op in inst.operands]
    for syntax, md in s.arch['insts'][inst.mnemonic]['syntax'].items():
      pattern = syntax.split(',')
      if len(pattern) != len(kinds):
        continue
      if all(p == k or (p == 't' and k in ('i', 'l'))
             for p, k in zip(pattern, kinds)):
        return md, kinds
    raise AssemblerError(inst.line_no,
                         f"bad operands for {inst.mnemonic}: "
                         f"{', '.join(inst.operands) or '(none)'}")

  def register(s, inst, tok):
    m = REG_RE.match(tok) or MEM_RE.match(tok)
    reg = int(m.group(1))
    if reg >= NUM_REGS:
      raise AssemblerError(inst.line_no, f"invalid register {tok!r}")
    return reg

  def literal(s, inst, value):
    if not (LITERAL_MIN <= value <= LITERAL_MAX):
      raise AssemblerError(inst.line_no,
                           f"literal {value} does not fit in 6 bits")
    return value & 0x3f

  def target(s, inst, tok):
    if tok not in s.labels:
      raise AssemblerError(inst.line_no, f"undefined label {tok!r}")
    # The branch lands on pc + displacement once write-back advances
    # the pc, so the displacement is simply the distance in words.
    return (s.labels[tok] - inst.address) // WORD_SIZE

  def encodeInst(s, inst):
    if inst.mnemonic not in s.arch['insts']:
      raise AssemblerError(inst.line_no, f"invalid opcode {inst.mnemonic!r}")

    op        = s.arch['insts'][inst.mnemonic]['opcode']
    md, kinds = s.matchSyntax(inst)
    r1        = s.register(inst, inst.operands[0])
    low6      = 0

    if len(kinds) > 1:
      tok, kind = inst.operands[1], kinds[1]
      if   kind in ('r', '[r]'): low6 = s.register(inst, tok) << 2
      elif kind == 'i':          low6 = s.literal(inst, int(tok, 0))
      elif kind == 'l':          low6 = s.literal(inst, s.target(inst, tok))
      elif kind == 'd':          md   = SHIFT_DIRS[tok.upper()]

    return cs16.encode(op, md, r1, low6)

  def secondPass(s):
    code = bytearray()
    for inst in s.insts:
      code += s.encodeInst(inst)
    return bytes(code)

  def assemble(s, lines):
    s.labels = {}
    s.insts  = []
    s.firstPass(lines)
    return s.secondPass()


def assemble(source):
  if isinstance(source, str):
    source = source.splitlines()
  return Assembler().assemble(source)


#=======================================================================
# Command line
#=======================================================================
def main(argv=None):
  parser = argparse.ArgumentParser(
    prog='cacheasm', description='Assemble a program for the cache simulator')
  parser.add_argument('source', help='assembly source file')
  parser.add_argument('-o', '--output',
                      help='object file (default: source with .o extension)')
  args = parser.parse_args(argv)

  logging.basicConfig(format='%(levelname)s: %(message)s')

  output = args.output or os.path.splitext(args.source)[0] + '.o'

  try:
    with open(args.source, 'r') as f:
      code = Assembler().assemble(f.read().splitlines())
  except OSError:
    logger.error("Unable to open file: %s", args.source)
    return 1
  except AssemblerError as e:
    logger.error("%s: %s", args.source, e)
    return 1

  try:
    with open(output, 'wb') as f:
      f.write(code)
  except OSError:
    logger.error("Unable to create file: %s", output)
    return 1

  print(f"Assembly successful. Output written to {output}")
  return 0


if __name__ == '__main__':
  sys.exit(main())
