import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from stacheview.exceptions import CachedComputationError
from stacheview.templating import MemoizingCache


class TestMemoizingCache:
    def test_computes_once_per_key(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()
        calls: list[str] = []

        def compute() -> int:
            calls.append("a")
            return 1

        assert cache.get("a", compute) == 1
        assert cache.get("a", compute) == 1
        assert calls == ["a"]
        assert "a" in cache
        assert len(cache) == 1

    def test_keys_are_independent(self) -> None:
        cache: MemoizingCache[str] = MemoizingCache()

        assert cache.get("a", lambda: "A") == "A"
        assert cache.get("b", lambda: "B") == "B"
        assert len(cache) == 2

    def test_failure_is_wrapped_and_chained(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()
        failure = RuntimeError("boom")

        def compute() -> int:
            raise failure

        with pytest.raises(CachedComputationError) as exc_info:
            _ = cache.get("a", compute)

        assert exc_info.value.key == "a"
        assert exc_info.value.__cause__ is failure

    def test_failure_is_not_stored(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()

        def fail() -> int:
            raise RuntimeError("boom")

        with pytest.raises(CachedComputationError):
            _ = cache.get("a", fail)

        assert "a" not in cache
        assert cache.get("a", lambda: 2) == 2

    def test_base_exceptions_propagate_unwrapped(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()

        def interrupt() -> int:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            _ = cache.get("a", interrupt)

        assert "a" not in cache

    def test_invalidate(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()
        _ = cache.get("a", lambda: 1)

        assert cache.invalidate("a") is True
        assert cache.invalidate("a") is False
        assert cache.get("a", lambda: 2) == 2

    def test_clear(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()
        _ = cache.get("a", lambda: 1)
        _ = cache.get("b", lambda: 2)

        cache.clear()

        assert len(cache) == 0


class TestConcurrentAccess:
    def test_concurrent_callers_share_one_computation(self) -> None:
        cache: MemoizingCache[object] = MemoizingCache()
        started = threading.Event()
        release = threading.Event()
        calls: list[int] = []

        def compute() -> object:
            calls.append(1)
            started.set()
            assert release.wait(timeout=5)
            return object()

        with ThreadPoolExecutor(max_workers=8) as pool:
            first = pool.submit(cache.get, "key", compute)
            assert started.wait(timeout=5)
            others = [pool.submit(cache.get, "key", compute) for _ in range(7)]
            release.set()
            results = [first.result(timeout=5)] + [f.result(timeout=5) for f in others]

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    def test_each_waiter_gets_its_own_wrapper(self) -> None:
        cache: MemoizingCache[int] = MemoizingCache()
        started = threading.Event()
        release = threading.Event()
        failure = RuntimeError("boom")

        def compute() -> int:
            started.set()
            assert release.wait(timeout=5)
            raise failure

        def call() -> BaseException:
            try:
                _ = cache.get("key", compute)
            except CachedComputationError as e:
                return e
            return AssertionError("expected a failure")

        with ThreadPoolExecutor(max_workers=4) as pool:
            first = pool.submit(call)
            assert started.wait(timeout=5)
            others = [pool.submit(call) for _ in range(3)]
            release.set()
            errors = [first.result(timeout=5)] + [f.result(timeout=5) for f in others]

        assert all(isinstance(e, CachedComputationError) for e in errors)
        assert len({id(e) for e in errors}) == len(errors)
        assert all(e.__cause__ is failure for e in errors)
