# File: pyCacheSimLib/mem/cache/lru_cache.py
# --------------------------------------------------------------------
# Fully-associative write-back data cache with true LRU replacement.
#
# Recency is a single logical clock: every access, hit or miss, stamps
# the touched slot with the next clock value. The slot with the
# smallest stamp is the least recently used one, and because stamps are
# never reused the victim choice is always unique.
#
# Date  \ 18 Oct 2026

from pyCacheSimLib.config import WORD_SIZE, MEM_FILLER
from pyCacheSimLib.errors import IllegalAddressError


class LRUCache:
    def __init__(self, num_blocks, block_size, data_words):
        self.num_blocks = num_blocks
        self.block_size = block_size
        self.data_words = data_words

        # Dictionary (per-slot metadata)
        self.valid      = [False] * num_blocks
        self.dirty      = [False] * num_blocks
        self.tags       = [0]     * num_blocks
        self.ref_counts = [0]     * num_blocks

        # Storage; the filler makes stale reads easy to spot
        self.lines = [bytearray([MEM_FILLER]) * (block_size * WORD_SIZE)
                      for _ in range(num_blocks)]

        # Next recency stamp to hand out and hit statistics
        self.ref_count = 1
        self.hits      = 0

        # Lower-level memory interface
        self.MemReadBlock  = None
        self.MemWriteBlock = None

        # Last event marker for linetrace (DH/DM/DE)
        self.last_event = ''

    # Connection to lower memory
    def setMemReadBlock(self, f):  self.MemReadBlock  = f
    def setMemWriteBlock(self, f): self.MemWriteBlock = f

    # Statistics
    @property
    def accesses(self):
        return self.ref_count - 1

    @property
    def misses(self):
        return self.accesses - self.hits

    def hitRate(self):
        if self.accesses == 0:
            return 0.0
        return self.hits / self.accesses

    # Address translation
    def addr2tag(self, addr):
        return addr // self.block_size

    def addr2offset(self, addr):
        return addr % self.block_size

    def checkAddr(self, addr):
        if not (0 <= addr < self.data_words):
            raise IllegalAddressError(addr)

    #=====================================================================
    # Slot management
    #=====================================================================
    def findBlock(self, tag):
        for i in range(self.num_blocks):
            if self.valid[i] and self.tags[i] == tag:
                return i
        return None

    # Writes the slot back if dirty and makes it available
    def writeBlock(self, block_id):
        if not self.valid[block_id]:
            return

        if self.dirty[block_id]:
            self.MemWriteBlock(self.tags[block_id], bytes(self.lines[block_id]))
            self.last_event = 'DE'

        self.valid[block_id]      = False
        self.dirty[block_id]      = False
        self.ref_counts[block_id] = 0

    # Evicts the least recently used slot and returns its id
    def removeLRU(self):
        lru      = None
        block_id = 0
        for i in range(self.num_blocks):
            if self.valid[i]:
                if lru is None or self.ref_counts[i] < lru:
                    lru      = self.ref_counts[i]
                    block_id = i

        self.writeBlock(block_id)
        return block_id

    # Brings the block into a free slot, evicting if needed
    def fetchBlock(self, tag):
        block_id = None
        for i in range(self.num_blocks):
            if not self.valid[i]:
                block_id = i
                break

        if block_id is None:
            block_id = self.removeLRU()

        self.lines[block_id][:]  = self.MemReadBlock(tag)
        self.valid[block_id]     = True
        self.dirty[block_id]     = False
        self.tags[block_id]      = tag

        return block_id

    # Resolves hit/miss and stamps the slot
    def access(self, addr):
        self.checkAddr(addr)

        tag      = self.addr2tag(addr)
        block_id = self.findBlock(tag)

        if block_id is None:
            self.last_event = 'DM'
            block_id = self.fetchBlock(tag)
        else:
            self.last_event = 'DH'
            self.hits += 1

        self.ref_counts[block_id] = self.ref_count
        self.ref_count += 1

        return block_id, self.addr2offset(addr) * WORD_SIZE

    #=====================================================================
    # Public interface
    #=====================================================================
    def read(self, addr):
        block_id, off = self.access(addr)
        line = self.lines[block_id]
        return (line[off] << 8) | line[off + 1]

    def write(self, addr, value):
        block_id, off = self.access(addr)
        line = self.lines[block_id]
        line[off    ] = (value >> 8) & 0xff
        line[off + 1] = value & 0xff
        self.dirty[block_id] = True

    def flushAll(self):
        for i in range(self.num_blocks):
            self.writeBlock(i)

    # Linetrace shows last event, then clear it
    def linetrace(self):
        ev = self.last_event or ''
        self.last_event = ''
        return ev
