"""
Tests for identifier allocation and per-key locking
"""

import threading

from transfer_ledger.identifiers import IdentifierAllocator
from transfer_ledger.locks import KeyedLockManager


class TestIdentifierAllocator:
    """Test IdentifierAllocator"""

    def test_starts_at_zero_and_increases(self):
        """Test sequential allocation"""
        allocator = IdentifierAllocator()
        assert [allocator.next() for _ in range(5)] == [0, 1, 2, 3, 4]
        assert allocator.peek() == 5

    def test_advance_past(self):
        """Test that later ids skip past an externally supplied id"""
        allocator = IdentifierAllocator()
        allocator.next()

        allocator.advance_past(10)
        assert allocator.next() == 11

        # Never moves backwards
        allocator.advance_past(3)
        assert allocator.next() == 12

    def test_unique_under_concurrency(self):
        """Test no id is handed out twice across many threads"""
        allocator = IdentifierAllocator()
        results = []
        results_lock = threading.Lock()
        start = threading.Barrier(16)

        def worker():
            start.wait()
            local = [allocator.next() for _ in range(500)]
            with results_lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 16 * 500
        assert len(set(results)) == len(results)
        assert sorted(results) == list(range(16 * 500))


class TestKeyedLockManager:
    """Test per-key lock acquisition"""

    def test_registry_empty_when_idle(self):
        """Test keys only occupy the registry while held"""
        locks = KeyedLockManager()
        assert len(locks) == 0

        with locks.acquire(1, 2):
            assert len(locks) == 2
            assert locks.is_locked(1)

        assert len(locks) == 0
        assert not locks.is_locked(1)

    def test_acquire_orders_and_deduplicates(self):
        """Test keys are sorted and duplicates collapse to one lock"""
        locks = KeyedLockManager()

        with locks.acquire(2222, 1111) as ordered:
            assert ordered == [1111, 2222]
            assert locks.is_locked(1111)
            assert locks.is_locked(2222)

        with locks.acquire(5, 5) as ordered:
            assert ordered == [5]
            assert len(locks) == 1

        assert not locks.is_locked(1111)
        assert not locks.is_locked(2222)

    def test_released_on_error(self):
        """Test locks are released and dropped when the block raises"""
        locks = KeyedLockManager()
        try:
            with locks.acquire(1, 2):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert not locks.is_locked(1)
        assert not locks.is_locked(2)
        assert len(locks) == 0

    def test_waiter_keeps_entry_alive(self):
        """Test a key stays registered while another thread waits on it"""
        locks = KeyedLockManager()
        entered = threading.Event()
        done = threading.Event()

        def other():
            with locks.acquire(1):
                entered.set()
            done.set()

        with locks.acquire(1):
            t = threading.Thread(target=other)
            t.start()
            assert not entered.wait(timeout=0.2)
            assert len(locks) == 1

        t.join(timeout=5)
        assert entered.is_set() and done.is_set()
        assert len(locks) == 0

    def test_disjoint_keys_do_not_block(self):
        """Test holding one key does not block another"""
        locks = KeyedLockManager()
        acquired = threading.Event()

        def other():
            with locks.acquire(3, 4):
                acquired.set()

        with locks.acquire(1, 2):
            t = threading.Thread(target=other)
            t.start()
            assert acquired.wait(timeout=5)
            t.join()

    def test_opposite_order_does_not_deadlock(self):
        """Test two threads asking for the same pair in opposite order both finish"""
        locks = KeyedLockManager()
        counter = {"value": 0}

        def worker(a, b):
            for _ in range(2000):
                with locks.acquire(a, b):
                    counter["value"] += 1

        t1 = threading.Thread(target=worker, args=(1, 2))
        t2 = threading.Thread(target=worker, args=(2, 1))
        t1.start()
        t2.start()
        t1.join(timeout=30)
        t2.join(timeout=30)

        assert not t1.is_alive() and not t2.is_alive()
        assert counter["value"] == 4000
        assert len(locks) == 0
