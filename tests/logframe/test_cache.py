import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import RecordingEngine
from logframe.api import Logger, set_factory
from logframe.cache import InstanceCache
from logframe.levels import Level
from logframe.logger import EngineLoggerFactory


def test_same_key_returns_same_instance():
    cache = InstanceCache(lambda name, level: object())
    first = cache.get_or_create("svc.a", Level.INFO)
    assert cache.get_or_create("svc.a", Level.INFO) is first


def test_distinct_keys_construct_distinct_instances():
    cache = InstanceCache(lambda name, level: (name, level))
    assert cache.get_or_create("svc.a", Level.INFO) == ("svc.a", Level.INFO)
    assert cache.get_or_create("svc.a", Level.DEBUG) == ("svc.a", Level.DEBUG)
    assert cache.get_or_create("svc.b", Level.INFO) == ("svc.b", Level.INFO)
    assert len(cache) == 3


def test_names_are_not_normalized():
    cache = InstanceCache(lambda name, level: [name])
    blank = cache.get_or_create("   ", Level.INFO)
    empty = cache.get_or_create("", Level.INFO)
    assert blank == ["   "]
    assert empty == [""]
    assert blank is not empty


def test_off_is_never_cached():
    calls = []
    cache = InstanceCache(lambda name, level: calls.append(name))
    with pytest.raises(ValueError):
        cache.get_or_create("svc.a", Level.OFF)
    assert calls == []
    assert len(cache) == 0


def test_concurrent_requests_construct_once():
    engine = RecordingEngine(open_delay=0.01)
    factory = EngineLoggerFactory(engine)
    workers = 16
    barrier = threading.Barrier(workers)

    def acquire(_):
        barrier.wait()
        return factory.logger("svc.concurrent")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        handles = list(pool.map(acquire, range(workers)))

    assert engine.opened == ["svc.concurrent"]
    assert all(handle is handles[0] for handle in handles)


def test_concurrent_facade_acquisition_opens_one_channel():
    engine = RecordingEngine(open_delay=0.01)
    set_factory(EngineLoggerFactory(engine))
    workers = 8
    barrier = threading.Barrier(workers)

    def acquire(_):
        barrier.wait()
        return Logger.instance("svc.facade.concurrent")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        handles = list(pool.map(acquire, range(workers)))

    assert engine.opened == ["svc.facade.concurrent"]
    assert len({id(handle) for handle in handles}) == 1
