# File: pyCacheSimLib/sim.py
# --------------------------------------------------------------------
# Command line driver: load an object and a data file, run the
# simulation to completion and print the report.
#
# Date  \ 18 Oct 2026

import argparse
import logging
import sys

from pyCacheSimLib.config        import SimConfig, DEFAULT_CACHE_BLOCKS, \
                                        DEFAULT_BLOCK_SIZE,              \
                                        DEFAULT_BRANCH_LIMIT
from pyCacheSimLib.errors        import LoaderError
from pyCacheSimLib.system        import BasicSystem
from pyCacheSimLib.system.report import report

logger = logging.getLogger('pyCacheSimLib')

def parse_args(argv):
  parser = argparse.ArgumentParser(
    prog='cachesim',
    description='Cycle-level processor simulator with an LRU data cache')
  parser.add_argument('object', help='assembled object file')
  parser.add_argument('data',   help='hex data file')
  parser.add_argument('--cache-blocks', type=int, default=DEFAULT_CACHE_BLOCKS,
                      help='number of cache slots (default: %(default)s)')
  parser.add_argument('--block-size', type=int, default=DEFAULT_BLOCK_SIZE,
                      help='words per block (default: %(default)s)')
  parser.add_argument('--branch-limit', type=int,
                      default=DEFAULT_BRANCH_LIMIT,
                      help='branches before declaring an infinite loop '
                           '(default: %(default)s)')
  parser.add_argument('--trace', action='store_true',
                      help='print a linetrace for every instruction')
  parser.add_argument('-v', '--verbose', action='count', default=0,
                      help='more loader output')
  return parser.parse_args(argv)

def main(argv=None):
  args = parse_args(argv)

  level = logging.WARNING
  if args.verbose > 0: level = logging.INFO
  logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

  config = SimConfig(cache_blocks = args.cache_blocks,
                     block_size   = args.block_size,
                     branch_limit = args.branch_limit)
  try:
    system = BasicSystem(config, doLinetrace=args.trace)
  except ValueError as e:
    logger.error("Invalid cache geometry: %s", e)
    return 2

  try:
    system.loader(args.object, args.data)
  except LoaderError as e:
    logger.error("Failed to load files: %s", e)
    return 1

  system.run(trace=print)
  print(report(system))
  return 0

if __name__ == '__main__':
  sys.exit(main())
