# File: pyCacheSimLib/__init__.py
# --------------------------------------------------------------------
# Cycle-level simulator of a 16-bit processor with a fully-associative,
# write-back LRU data cache.
#
# Date  \ 18 Oct 2026

__version__ = '1.0.0'
