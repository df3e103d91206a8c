from pyCacheSimLib.mem.cache.lru_cache import LRUCache
