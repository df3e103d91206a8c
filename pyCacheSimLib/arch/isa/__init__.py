from pyCacheSimLib.arch.isa import cs16
