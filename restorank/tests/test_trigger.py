from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from restorank.signals.trigger import EmbeddingTrigger


def test_dispatch_returns_future_with_result():
    trigger = EmbeddingTrigger(lambda user_id: f"rebuilt {user_id}", max_workers=1)
    try:
        assert trigger.dispatch("u1").result(timeout=5) == "rebuilt u1"
    finally:
        trigger.shutdown()


def test_dispatch_does_not_wait_for_rebuild():
    release = threading.Event()
    trigger = EmbeddingTrigger(lambda user_id: release.wait(5), max_workers=1)
    try:
        future = trigger.dispatch("u1")
        assert not future.done()
        release.set()
        assert future.result(timeout=5) is True
    finally:
        release.set()
        trigger.shutdown()


def test_failures_are_logged_not_raised(caplog):
    def broken(user_id):
        raise RuntimeError("model unavailable")

    trigger = EmbeddingTrigger(broken, max_workers=1)
    future = trigger.dispatch("u1")
    # shutdown joins the worker, which runs the done callback
    trigger.shutdown(wait=True)

    assert isinstance(future.exception(), RuntimeError)
    assert "Embedding rebuild failed for user u1" in caplog.text


def test_shared_executor_is_not_shut_down():
    executor = ThreadPoolExecutor(max_workers=1)
    trigger = EmbeddingTrigger(lambda user_id: user_id, executor=executor)
    trigger.shutdown()
    try:
        assert executor.submit(lambda: 42).result(timeout=5) == 42
    finally:
        executor.shutdown()


def test_dispatch_after_shutdown_raises():
    trigger = EmbeddingTrigger(lambda user_id: None, max_workers=1)
    trigger.shutdown()
    with pytest.raises(RuntimeError):
        trigger.dispatch("u1")
