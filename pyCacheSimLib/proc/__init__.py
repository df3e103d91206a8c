from pyCacheSimLib.proc.cycle_proc import CycleProcessor
