import threading

import pytest

from citychain.ts_queue import TSQueue


def test_enqueue_dequeue_sequence():
    q = TSQueue()
    q.enqueue(1)
    q.enqueue(2)
    q.enqueue(3)

    assert q.head() == 1
    assert list(q)[1] == 2
    assert q.tail() == 3

    q.dequeue()
    assert q.head() == 2
    assert q.tail() == 3

    q.dequeue()
    assert q.head() == 3
    assert q.tail() == 3

    q.dequeue()
    assert q.is_empty()
    q.destroy()
    assert len(q) == 0


def test_dequeue_returns_items_in_order():
    q = TSQueue()
    for item in ("a", "b", "c"):
        q.enqueue(item)
    assert [q.dequeue() for _ in range(3)] == ["a", "b", "c"]


def test_dequeue_empty_is_noop():
    q = TSQueue()
    assert q.dequeue() is None
    assert q.is_empty()
    assert len(q) == 0


def test_len_tracks_size():
    q = TSQueue()
    q.enqueue(1)
    q.enqueue(2)
    assert len(q) == 2
    q.dequeue()
    assert len(q) == 1


def test_head_tail_empty_raise():
    q = TSQueue()
    with pytest.raises(IndexError):
        q.head()
    with pytest.raises(IndexError):
        q.tail()


def test_destructor_called_on_dequeue():
    removed = []
    q = TSQueue(removed.append)
    q.enqueue(1)
    q.enqueue(2)
    q.dequeue()
    assert removed == [1]


def test_destroy_calls_destructor_on_all_items():
    removed = []
    q = TSQueue(removed.append)
    for item in (1, 2, 3):
        q.enqueue(item)
    q.destroy()
    assert removed == [1, 2, 3]
    assert q.is_empty()


def test_nolock_variants_under_lock():
    q = TSQueue()
    with q.mutex:
        q.enqueue_nolock(5)
        q.enqueue_nolock(6)
        assert q.dequeue_nolock() == 5
    assert list(q) == [6]


def test_iteration_is_snapshot():
    q = TSQueue()
    q.enqueue(1)
    q.enqueue(2)
    seen = []
    for item in q:
        seen.append(item)
        q.enqueue(item)
    assert seen == [1, 2]
    assert list(q) == [1, 2, 1, 2]


def test_concurrent_enqueue():
    q = TSQueue()

    def worker(base):
        for i in range(200):
            q.enqueue(base + i)

    threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(q) == 800
    assert sorted(q) == sorted(n * 1000 + i for n in range(4) for i in range(200))