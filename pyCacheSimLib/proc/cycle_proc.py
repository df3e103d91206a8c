# File: pyCacheSimLib/proc/cycle_proc.py
# --------------------------------------------------------------------
# Multi-cycle processor: the core with every data access routed
# through a fully-associative LRU write-back cache. Instruction
# fetches go straight to code memory.
#
# Date  \ 18 Oct 2026

from pyCacheSimLib.proc.core      import CycleCore
from pyCacheSimLib.mem.cache      import LRUCache
from pyCacheSimLib.config         import DEFAULT_CACHE_BLOCKS, \
                                         DEFAULT_BLOCK_SIZE,   \
                                         DEFAULT_DATA_WORDS,   \
                                         DEFAULT_BRANCH_LIMIT

class CycleProcessor:
    def __init__(self,
                 cache_blocks: int = DEFAULT_CACHE_BLOCKS,
                 block_size:   int = DEFAULT_BLOCK_SIZE,
                 data_words:   int = DEFAULT_DATA_WORDS,
                 branch_limit: int = DEFAULT_BRANCH_LIMIT):
        # 1) Core
        self.core = CycleCore(branch_limit=branch_limit)

        # 2) D-cache
        self.dcache = LRUCache(cache_blocks, block_size, data_words)

        # 3) Hook up D-cache to core
        self.core.setDMemRead(  self.dcache.read  )
        self.core.setDMemWrite( self.dcache.write )

    # Memory interface passthrough
    def setIMemRead(s, f):      s.core.setIMemRead(f)
    def setMemReadBlock(s, f):  s.dcache.setMemReadBlock(f)
    def setMemWriteBlock(s, f): s.dcache.setMemWriteBlock(f)

    # Flags / exit
    def halted(s):             return s.core.halted()
    def instCompletionFlag(s): return s.core.instCompletionFlag()
    def getExitStatus(s):      return s.core.getExitStatus()

    # Drains every pending write to memory
    def flush(s):
        s.dcache.flushAll()

    # Advance one phase
    def tick(s):
        s.core.tick()

    # Combined linetrace
    def linetrace(s):
        core_lt = s.core.linetrace()
        dc_lt   = s.dcache.linetrace()
        parts = [core_lt]
        if dc_lt: parts.append(dc_lt)
        return ' | '.join(parts)
