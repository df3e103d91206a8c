from pyCacheSimLib.mem.backing_store import BackingStore
from pyCacheSimLib.mem.cache         import LRUCache
