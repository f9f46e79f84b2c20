"""Tests for the RWLock guarding the bundle cache map.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference (prevents starvation)
- Reentrant read locks
- Read-to-write upgrade rejection
- Write-to-write reentry rejection
- Write-to-read downgrade rejection
"""

import threading
import time

import pytest

from translatebridge.runtime.rwlock import RWLock


class TestRWLockBasics:
    """Test basic RWLock functionality."""

    def test_single_reader(self) -> None:
        """Single reader can acquire lock."""
        lock = RWLock()

        with lock.read():
            assert lock.reader_count == 1

        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        """Single writer can acquire lock."""
        lock = RWLock()

        with lock.write():
            assert lock.writer_active

        assert not lock.writer_active

    def test_readers_share_lock(self) -> None:
        """Multiple readers hold the lock at the same time."""
        lock = RWLock()
        barrier = threading.Barrier(4)
        peak: list[int] = []

        def reader() -> None:
            with lock.read():
                barrier.wait(timeout=5)
                peak.append(lock.reader_count)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert max(peak) == 4

    def test_write_blocks_readers(self) -> None:
        """Writers block readers from acquiring lock."""
        lock = RWLock()
        writer_active = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_active.set()
                time.sleep(0.05)
                order.append("writer done")

        def reader() -> None:
            writer_active.wait()
            with lock.read():
                order.append("reader in")

        writer_thread = threading.Thread(target=writer)
        reader_thread = threading.Thread(target=reader)
        writer_thread.start()
        reader_thread.start()
        writer_thread.join()
        reader_thread.join()

        assert order == ["writer done", "reader in"]

    def test_read_blocks_writers(self) -> None:
        """Readers block writers from acquiring lock."""
        lock = RWLock()
        reader_active = threading.Event()
        order: list[str] = []

        def reader() -> None:
            with lock.read():
                reader_active.set()
                time.sleep(0.05)
                order.append("reader done")

        def writer() -> None:
            reader_active.wait()
            with lock.write():
                order.append("writer in")

        reader_thread = threading.Thread(target=reader)
        writer_thread = threading.Thread(target=writer)
        reader_thread.start()
        writer_thread.start()
        reader_thread.join()
        writer_thread.join()

        assert order == ["reader done", "writer in"]


class TestReentrancy:
    """Reentrant reads and prohibited transitions."""

    def test_reentrant_read(self) -> None:
        """Same thread can nest read locks."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_upgrade_rejected(self) -> None:
        """Read-to-write upgrade raises."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass
        assert lock.reader_count == 0

    def test_downgrade_rejected(self) -> None:
        """Write-to-read downgrade raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="while holding write lock"):
            with lock.read():
                pass
        assert not lock.writer_active

    def test_write_reentry_rejected(self) -> None:
        """Nested write lock raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding write lock"):
            with lock.write():
                pass

    def test_release_without_acquire(self) -> None:
        """Releasing an unheld lock raises."""
        lock = RWLock()
        with pytest.raises(RuntimeError, match="does not hold read lock"):
            lock._release_read()
        with pytest.raises(RuntimeError, match="does not hold write lock"):
            lock._release_write()


class TestWriterPreference:
    """Queued writers are served before new readers."""

    def test_new_reader_waits_for_queued_writer(self) -> None:
        lock = RWLock()
        first_reader_in = threading.Event()
        release_first_reader = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_in.set()
                release_first_reader.wait(timeout=5)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("late reader")

        t1 = threading.Thread(target=first_reader)
        t1.start()
        first_reader_in.wait(timeout=5)

        t2 = threading.Thread(target=writer)
        t2.start()
        # Let the writer queue up behind the first reader
        deadline = time.monotonic() + 5
        while lock._waiting_writers == 0 and time.monotonic() < deadline:
            time.sleep(0.001)

        t3 = threading.Thread(target=late_reader)
        t3.start()
        time.sleep(0.02)
        release_first_reader.set()

        for thread in (t1, t2, t3):
            thread.join()

        assert order == ["writer", "late reader"]
