# File: pyCacheSimLib/config.py
# --------------------------------------------------------------------
# Run geometry. Everything that used to be a compile-time constant of
# the simulator lives here and is validated once per run.
#
# Date  \ 18 Oct 2026

WORD_SIZE     = 2
NUM_REGS      = 16
MEM_FILLER    = 0xff
LINE_LENGTH   = 32

DEFAULT_CODE_WORDS   = 1024
DEFAULT_DATA_WORDS   = 1024
DEFAULT_CACHE_BLOCKS = 1
DEFAULT_BLOCK_SIZE   = 8
DEFAULT_BRANCH_LIMIT = 1000000

class SimConfig:
  def __init__(s,
               cache_blocks: int = DEFAULT_CACHE_BLOCKS,
               block_size:   int = DEFAULT_BLOCK_SIZE,
               data_words:   int = DEFAULT_DATA_WORDS,
               code_words:   int = DEFAULT_CODE_WORDS,
               branch_limit: int = DEFAULT_BRANCH_LIMIT):
    s.cache_blocks = cache_blocks
    s.block_size   = block_size
    s.data_words   = data_words
    s.code_words   = code_words
    s.branch_limit = branch_limit

  # Number of backing blocks in data memory
  @property
  def data_blocks(s):
    return s.data_words // s.block_size

  def validate(s):
    for name in ('cache_blocks', 'block_size', 'data_words',
                 'code_words', 'branch_limit'):
      if getattr(s, name) <= 0:
        raise ValueError(f"{name} must be positive, got {getattr(s, name)}")

    if s.data_words % s.block_size != 0:
      raise ValueError(
        f"block size {s.block_size} does not divide data memory "
        f"({s.data_words} words)")

    if s.data_words % (s.cache_blocks * s.block_size) != 0:
      raise ValueError(
        f"cache of {s.cache_blocks} x {s.block_size} words does not divide "
        f"data memory ({s.data_words} words)")

    return s

  def __repr__(s):
    return (f"SimConfig(cache_blocks={s.cache_blocks}, "
            f"block_size={s.block_size}, data_words={s.data_words}, "
            f"code_words={s.code_words}, branch_limit={s.branch_limit})")
