# File: pyCacheSimLib/loader.py
# --------------------------------------------------------------------
# Loaders for the object file (raw big-endian instruction words) and
# the hex data file (4 hex digits per word, no separators).
#
# Date  \ 18 Oct 2026

import logging
import string

from pyCacheSimLib.config import WORD_SIZE
from pyCacheSimLib.errors import LoaderError

logger = logging.getLogger(__name__)

HEX_DIGITS = set(string.hexdigits)


def load_object(path, store):
  """Copy the object file verbatim into code memory.

  Returns the number of bytes placed in code memory. Code memory past
  the end of the program keeps its filler.
  """
  try:
    with open(path, 'rb') as f:
      image = f.read()
  except OSError as e:
    raise LoaderError(path, e.strerror or str(e)) from e

  n = store.loadCode(image)
  if n < len(image):
    logger.warning("Object file exceeds code memory, %d bytes dropped.",
                   len(image) - n)
  if n % WORD_SIZE:
    logger.warning("Object file ends in the middle of an instruction.")

  logger.info("Read %d bytes from code file.", n)
  return n


class DataInserter:
  """Streams hex text into consecutive data words."""

  def __init__(self, store, path='<data>'):
    self.store = store
    self.path  = path
    self.index = 0

  def insert(self, line, line_no=0):
    line = line.strip()
    for i in range(0, len(line), 4):
      if self.index >= self.store.data_words:
        logger.warning("Data exceeds allocated memory size.")
        break

      chunk = line[i:i + 4]
      if not HEX_DIGITS.issuperset(chunk):
        raise LoaderError(self.path,
                          f"line {line_no}: invalid hex data {chunk!r}")
      if len(chunk) < 4:
        logger.warning("Line %d: dropping partial word %r.", line_no, chunk)
        break

      self.store.writeDataWord(self.index, int(chunk[:2], 16),
                               int(chunk[2:], 16))
      self.index += 1


def load_data(path, store):
  """Load the hex data file into data memory, block-major.

  Returns the number of lines read. Input beyond the data capacity is
  dropped with a warning; a short file leaves the filler in place.
  """
  inserter = DataInserter(store, path)
  line_count = 0

  try:
    with open(path, 'r') as f:
      for line_count, line in enumerate(f, 1):
        inserter.insert(line, line_count)
  except OSError as e:
    raise LoaderError(path, e.strerror or str(e)) from e
  except UnicodeDecodeError as e:
    raise LoaderError(path, "not a text file") from e

  logger.info("Read %d lines from data file (%d words).",
              line_count, inserter.index)
  return line_count
