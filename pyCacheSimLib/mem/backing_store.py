# File: pyCacheSimLib/mem/backing_store.py
# --------------------------------------------------------------------
# Flat code memory plus block-organized data memory. Data memory is
# laid out exactly the way the cache stages it: an array of blocks of
# big-endian 2-byte words.
#
# Date  \ 18 Oct 2026

from pyCacheSimLib.config import WORD_SIZE, MEM_FILLER
from pyCacheSimLib.errors import IllegalAddressError

class BackingStore:
  def __init__(s, config):
    s.block_size  = config.block_size
    s.block_bytes = config.block_size * WORD_SIZE
    s.data_blocks = config.data_blocks
    s.code_words  = config.code_words

    # Everything starts out as the illegal-instruction filler
    s.code = bytearray([MEM_FILLER]) * (s.code_words * WORD_SIZE)
    s.data = [bytearray([MEM_FILLER]) * s.block_bytes
              for _ in range(s.data_blocks)]

  @property
  def data_words(s):
    return s.data_blocks * s.block_size

  #=====================================================================
  # Code memory
  #=====================================================================
  def loadCode(s, image):
    n = min(len(image), len(s.code))
    s.code[:n] = image[:n]
    return n

  def readCodeWord(s, addr):
    if not (0 <= addr < s.code_words):
      raise IllegalAddressError(addr)
    base = addr * WORD_SIZE
    return bytes(s.code[base:base + WORD_SIZE])

  #=====================================================================
  # Data memory: block interface used by the cache
  #=====================================================================
  def checkTag(s, tag):
    if not (0 <= tag < s.data_blocks):
      raise IllegalAddressError(tag * s.block_size)

  def readBlock(s, tag):
    s.checkTag(tag)
    return bytearray(s.data[tag])

  def writeBlock(s, tag, data):
    s.checkTag(tag)
    assert len(data) == s.block_bytes, "Block size mismatch"
    s.data[tag][:] = data

  #=====================================================================
  # Data memory: word interface used by the loader and the report
  #=====================================================================
  def writeDataWord(s, index, hi, lo):
    if not (0 <= index < s.data_words):
      raise IllegalAddressError(index)
    blk = s.data[index // s.block_size]
    off = (index % s.block_size) * WORD_SIZE
    blk[off    ] = hi & 0xff
    blk[off + 1] = lo & 0xff

  def readDataWord(s, index):
    if not (0 <= index < s.data_words):
      raise IllegalAddressError(index)
    blk = s.data[index // s.block_size]
    off = (index % s.block_size) * WORD_SIZE
    return (blk[off] << 8) | blk[off + 1]

  def dataBytes(s):
    return b''.join(bytes(blk) for blk in s.data)
