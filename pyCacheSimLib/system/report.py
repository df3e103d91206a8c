# File: pyCacheSimLib/system/report.py
# --------------------------------------------------------------------
# End-of-run report: why the simulation stopped, cache statistics and
# a hex/ASCII dump of data memory.
#
# Date  \ 18 Oct 2026

from pyCacheSimLib.config         import LINE_LENGTH
from pyCacheSimLib.proc.core      import Phase

def terminal_reason(core):
  st = core.state
  ir = st.irWord()

  if core.phase == Phase.ILLEGAL_OPCODE:
    return (f"Illegal instruction {ir:04x} detected at address "
            f"{st.pc:04x}")
  elif core.phase == Phase.INFINITE_LOOP:
    return (f"Possible infinite loop detected with instruction {ir:04x} "
            f"at address {st.pc:04x}")
  elif core.phase == Phase.ILLEGAL_ADDRESS:
    return (f"Illegal address {st.mar:04x} detected with instruction "
            f"{ir:04x} at address {st.pc:04x}")
  return None

def cache_stats(cache):
  return (f"There were a total of {cache.hits} cache hits and "
          f"{cache.misses} cache misses, for a hit rate of "
          f"{cache.hitRate():4.3f}.")

# '.' for anything that isn't printable, non-space ASCII
def valid_ascii(byte):
  if byte < 0x21 or byte > 0x7e:
    return '.'
  return chr(byte)

def memory_dump(data):
  lines = []
  words = []
  text  = ''

  for i in range(0, len(data) - 1, 2):
    words.append(f"{data[i]:02x}{data[i + 1]:02x} ")
    text += valid_ascii(data[i]) + valid_ascii(data[i + 1])

    if len(text) == LINE_LENGTH:
      lines.append(''.join(words) + f"\t'{text}'")
      words = []
      text  = ''

  # Partial last line, only when capacity isn't a multiple of a line
  if words:
    lines.append(''.join(words))

  return '\n'.join(lines)

def report(system):
  parts  = []
  reason = terminal_reason(system.core)
  if reason is not None:
    parts.append(reason + '\n')

  parts.append(cache_stats(system.cache) + '\n')
  parts.append(memory_dump(system.mem.dataBytes()))
  return '\n'.join(parts)
