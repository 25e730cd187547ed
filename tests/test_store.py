import threading

import pytest

from layoutlens.api.exceptions import StoreUnavailableError
from layoutlens.api.schemas.project import Point, Project, Wall
from layoutlens.api.services.store import ProjectStore


def make_project(project_id="p1", name="Room", walls=None):
    return Project(id=project_id, name=name, walls=walls or [])


def make_wall(wall_id="w1"):
    return Wall(id=wall_id, start=Point(x=0, y=0), end=Point(x=10, y=0), thickness=0.2)


def test_insert_and_get(store):
    project = make_project()
    store.insert("p1", project)

    assert store.get("p1") == project
    assert store.contains("p1")
    assert len(store) == 1


def test_get_missing(store):
    assert store.get("missing") is None
    assert not store.contains("missing")


def test_insert_overwrites(store):
    store.insert("p1", make_project(name="First"))
    store.insert("p1", make_project(name="Second"))

    assert store.get("p1").name == "Second"
    assert len(store) == 1


def test_get_returns_a_copy(store):
    """Mutating a fetched project never touches the stored record"""
    store.insert("p1", make_project(walls=[make_wall()]))

    fetched = store.get("p1")
    fetched.name = "Changed"
    fetched.walls.append(make_wall("w2"))
    fetched.walls[0].start.x = 99

    stored = store.get("p1")
    assert stored.name == "Room"
    assert [w.id for w in stored.walls] == ["w1"]
    assert stored.walls[0].start.x == 0


def test_insert_stores_a_copy(store):
    project = make_project()
    store.insert("p1", project)

    project.walls.append(make_wall())

    assert store.get("p1").walls == []


def test_replace_existing(store):
    store.insert("p1", make_project(name="Old"))

    updated = make_project(name="New", walls=[make_wall()])
    result = store.replace("p1", updated)

    assert result == updated
    assert store.get("p1") == updated


def test_replace_missing_leaves_store_untouched(store):
    assert store.replace("missing", make_project("missing")) is None
    assert len(store) == 0


def test_write_times_out_while_read_held():
    store = ProjectStore(lock_timeout=0.05)
    store._lock.acquire_read()
    try:
        with pytest.raises(StoreUnavailableError):
            store.insert("p1", make_project())
    finally:
        store._lock.release_read()

    store.insert("p1", make_project())
    assert store.contains("p1")


def test_read_times_out_while_write_held():
    store = ProjectStore(lock_timeout=0.05)
    store._lock.acquire_write()
    try:
        with pytest.raises(StoreUnavailableError):
            store.get("p1")
    finally:
        store._lock.release_write()


def test_concurrent_inserts_are_all_kept(store):
    def worker(n):
        for i in range(50):
            store.insert(f"p{n}-{i}", make_project(f"p{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 400
