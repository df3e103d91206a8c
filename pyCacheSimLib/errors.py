# File: pyCacheSimLib/errors.py
# --------------------------------------------------------------------
# Exceptions shared by the memories, loaders and the assembler.
#
# Date  \ 18 Oct 2026

class SimError(Exception):
  pass

class IllegalAddressError(SimError):
  def __init__(s, address):
    super().__init__(f"illegal address {address:#06x}")
    s.address = address

class LoaderError(SimError):
  def __init__(s, path, reason):
    super().__init__(f"{path}: {reason}")
    s.path   = path
    s.reason = reason

class AssemblerError(SimError):
  def __init__(s, line_no, message):
    super().__init__(f"line {line_no}: {message}")
    s.line_no = line_no
