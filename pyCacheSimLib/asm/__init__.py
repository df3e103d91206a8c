from pyCacheSimLib.asm.assembler import Assembler, assemble
