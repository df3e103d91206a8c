from pyCacheSimLib.system.basic import BasicSystem
