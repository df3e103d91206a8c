import unittest

from pyCacheSimLib.config    import SimConfig
from pyCacheSimLib.errors    import IllegalAddressError
from pyCacheSimLib.mem       import BackingStore, LRUCache


def make_cache(cache_blocks=2, block_size=8, data_words=64):
    config = SimConfig(cache_blocks=cache_blocks, block_size=block_size,
                       data_words=data_words).validate()
    store = BackingStore(config)
    cache = LRUCache(cache_blocks, block_size, data_words)
    cache.setMemReadBlock(store.readBlock)
    cache.setMemWriteBlock(store.writeBlock)
    return cache, store


class LRUCacheTestCase(unittest.TestCase):
    def setUp(self):
        self.cache, self.store = make_cache()
        for i in range(self.store.data_words):
            self.store.writeDataWord(i, i >> 8, i & 0xff)

    def test_address_validation(self):
        for addr in (-1, 64, 65, 0xffff):
            with self.assertRaises(IllegalAddressError):
                self.cache.read(addr)
            with self.assertRaises(IllegalAddressError):
                self.cache.write(addr, 0x1234)
        self.assertEqual(self.cache.read(0), 0)
        self.assertEqual(self.cache.read(63), 63)
        # rejected accesses are not counted
        self.assertEqual(self.cache.accesses, 2)

    def test_address_translation(self):
        self.assertEqual(self.cache.addr2tag(19), 2)
        self.assertEqual(self.cache.addr2offset(19), 3)

    def test_miss_then_hit(self):
        self.assertEqual(self.cache.read(5), 5)
        self.assertEqual(self.cache.linetrace(), 'DM')
        self.assertEqual(self.cache.read(6), 6)
        self.assertEqual(self.cache.linetrace(), 'DH')
        self.assertEqual(self.cache.hits, 1)
        self.assertEqual(self.cache.misses, 1)

    def test_recency_stamps_strictly_increase(self):
        stamps = []
        for addr in (0, 8, 0, 16, 9, 9, 40, 0):
            self.cache.read(addr)
            stamps.append(max(self.cache.ref_counts))
        self.assertEqual(stamps, list(range(1, 9)))
        self.assertEqual(self.cache.ref_count, 9)

        valid = [r for r, v in zip(self.cache.ref_counts, self.cache.valid) if v]
        self.assertEqual(len(valid), len(set(valid)))

    def test_accounting(self):
        self.assertEqual(self.cache.hits + self.cache.misses, 0)
        self.assertEqual(self.cache.hitRate(), 0.0)

        for addr in (0, 1, 8, 16, 2, 3, 24):
            self.cache.read(addr)
        self.cache.write(25, 7)

        self.assertEqual(self.cache.hits + self.cache.misses,
                         self.cache.ref_count - 1)
        self.assertEqual(self.cache.hits, 3)
        self.assertEqual(self.cache.misses, 5)
        self.assertAlmostEqual(self.cache.hitRate(), 3 / 8)

    def test_lru_victim(self):
        self.cache.read(0)    # tag 0 -> slot 0
        self.cache.read(8)    # tag 1 -> slot 1
        self.cache.read(0)    # hit, tag 0 is now the most recent
        self.cache.read(16)   # evicts tag 1
        self.assertEqual(self.cache.tags, [0, 2])

        self.cache.read(8)    # evicts tag 0
        self.assertEqual(self.cache.tags, [1, 2])

    def test_write_restamps_recency(self):
        self.cache.read(0)
        self.cache.read(8)
        self.cache.write(1, 0xaaaa)   # hit on tag 0
        self.cache.read(16)           # tag 1 is the LRU one
        self.assertEqual(sorted(self.cache.tags), [0, 2])

    def test_write_back_on_eviction(self):
        self.cache.write(3, 0xbeef)
        self.assertEqual(self.store.readDataWord(3), 3)

        self.cache.read(8)
        self.cache.read(16)
        self.assertEqual(self.cache.linetrace(), 'DE')
        self.assertEqual(self.store.readDataWord(3), 0xbeef)
        # rest of the block is untouched
        self.assertEqual(self.store.readDataWord(2), 2)

    def test_clean_eviction_leaves_memory(self):
        before = self.store.dataBytes()
        for addr in (0, 8, 16, 24, 32, 0):
            self.cache.read(addr)
        self.cache.flushAll()
        self.assertEqual(self.store.dataBytes(), before)

    def test_dirty_stays_dirty(self):
        self.cache.write(4, 1)
        self.cache.write(4, 2)
        block_id = self.cache.findBlock(0)
        self.assertTrue(self.cache.dirty[block_id])
        self.assertEqual(self.cache.read(4), 2)

    def test_flush_all(self):
        self.cache.write(0, 0x1111)
        self.cache.write(9, 0x2222)
        self.cache.flushAll()

        self.assertEqual(self.cache.valid, [False, False])
        self.assertEqual(self.cache.dirty, [False, False])
        self.assertEqual(self.store.readDataWord(0), 0x1111)
        self.assertEqual(self.store.readDataWord(9), 0x2222)

        # flushing twice is harmless
        self.cache.flushAll()
        self.assertEqual(self.store.readDataWord(0), 0x1111)

    def test_idempotent_reads(self):
        before = self.store.dataBytes()
        values = [self.cache.read(42) for _ in range(5)]
        self.assertEqual(values, [42] * 5)
        self.cache.flushAll()
        self.assertEqual(self.store.dataBytes(), before)

    def test_words_are_big_endian(self):
        self.cache.write(10, 0x4142)
        self.cache.flushAll()
        blk = self.store.data[1]
        self.assertEqual(bytes(blk[4:6]), b'AB')


class SingleSlotTestCase(unittest.TestCase):
    def test_two_writes_in_different_blocks(self):
        cache, store = make_cache(cache_blocks=1, block_size=8, data_words=1024)

        cache.write(2, 0x1234)     # tag 0
        cache.write(13, 0x5678)    # tag 1, evicts tag 0
        self.assertEqual(store.readDataWord(2), 0x1234)

        cache.flushAll()
        self.assertEqual(store.readDataWord(13), 0x5678)
        self.assertEqual(cache.hits, 0)
        self.assertEqual(cache.misses, 2)
        # the rest of both blocks keeps the filler
        self.assertEqual(store.readDataWord(3), 0xffff)
        self.assertEqual(store.readDataWord(12), 0xffff)
