# File: pyCacheSimLib/system/basic.py
# --------------------------------------------------------------------
# A basic system with a multi-cycle processor, its data cache and the
# backing store.
#
# Date  \ 18 Oct 2026

from pyCacheSimLib.config import SimConfig
from pyCacheSimLib.proc   import CycleProcessor
from pyCacheSimLib.mem    import BackingStore
from pyCacheSimLib.loader import load_object, load_data

class BasicSystem:
  def __init__(s,
               config:      SimConfig = None,
               doLinetrace: bool      = False):
    s.config = (config or SimConfig()).validate()

    # 1) Processor with cache
    s.proc = CycleProcessor(
      cache_blocks = s.config.cache_blocks,
      block_size   = s.config.block_size,
      data_words   = s.config.data_words,
      branch_limit = s.config.branch_limit
    )

    # 2) Code and data memory
    s.mem = BackingStore(s.config)

    # 3) Wire core/cache -> memory
    s.proc.setIMemRead(      s.mem.readCodeWord )
    s.proc.setMemReadBlock(  s.mem.readBlock    )
    s.proc.setMemWriteBlock( s.mem.writeBlock   )

    # 4) Linetrace?
    s.doLinetrace = doLinetrace

  # Convenience accessors
  @property
  def core(s):   return s.proc.core
  @property
  def cache(s):  return s.proc.dcache

  def loader(s, obj_path, data_path):
    load_object(obj_path, s.mem)
    load_data(data_path, s.mem)

  def loadProgram(s, image):
    return s.mem.loadCode(image)

  def getExitStatus(s):      return s.proc.getExitStatus()
  def halted(s):             return s.proc.halted()
  def instCompletionFlag(s): return s.proc.instCompletionFlag()

  def tick(s):
    s.proc.tick()

  # Runs until a terminal phase, then flushes the cache so that data
  # memory is authoritative. Returns the terminal phase.
  def run(s, trace=None):
    while not s.halted():
      s.tick()
      if s.doLinetrace and s.instCompletionFlag() and trace is not None:
        trace(s.linetrace())

    s.proc.flush()
    return s.core.phase

  def linetrace(s):
    if not s.doLinetrace: return ''
    return s.proc.linetrace()
