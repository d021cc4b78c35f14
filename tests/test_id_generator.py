"""Tests for prefixed id generation."""

from signoff.services import id_generator
from signoff.services.id_generator import generate_id


def test_random_id_shape():
    value = generate_id("thr_")
    assert value.startswith("thr_")
    assert len(value) == len("thr_") + 16


def test_time_ordered_ids_sort_by_creation(monkeypatch):
    clock = iter([1_767_600_000_000_000_000, 1_767_600_000_000_000_001, 1_767_600_000_000_100_000])
    monkeypatch.setattr(id_generator.time, "time_ns", lambda: next(clock))

    ids = [generate_id("appr_", time_ordered=True) for _ in range(3)]
    assert ids == sorted(ids)
    assert all(len(i) == len("appr_") + 24 for i in ids)
