from pyCacheSimLib.proc.core.cycle_core import CycleCore, Phase, ProcState
