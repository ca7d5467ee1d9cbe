"""Shared test fixtures for craftlog-lewitt tests."""

import json

import pytest

from craftlog_lewitt.events import LogContext


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def to_jsonl(records):
    return "\n".join(json.dumps(r) for r in records) + "\n"


def edit(ts, origin="human", added=0, deleted=0, **flags):
    return {
        "ts": ts,
        "event": "edit",
        "origin_mode": origin,
        "file": {"path": "src/app.ts", "lang": "typescript"},
        "delta": {"added_chars": added, "deleted_chars": deleted},
        "flags": {"is_paste_like": False, "is_undo_like": False, "is_redo_like": False, **flags},
    }


@pytest.fixture
def mixed_records():
    """Eight records covering every severity rule; five are edits."""
    return [
        {"ts": 1000, "event": "session_start", "session_id": "s1"},
        edit(2000, "human", added=120),
        edit(3000, "ai", added=4000, deleted=800),
        {"ts": 4000, "event": "snapshot"},
        edit(5000, "human", deleted=15, is_undo_like=True),
        edit(6000, "human", added=300, is_paste_like=True),
        {"ts": 7000, "event": "policy_violation", "kind": "secret"},
        edit(8000, "ai"),
    ]


@pytest.fixture
def mixed_context(mixed_records):
    return LogContext.from_text(to_jsonl(mixed_records))


@pytest.fixture
def non_edit_records():
    """Only non-edit kinds, so every event gets a cell."""
    return [
        {"ts": 1, "event": "session_start"},
        {"ts": 2, "event": "policy_violation"},
        {"ts": 3, "event": "snapshot"},
        {"ts": 4, "event": "mode_change", "to": "ai"},
        {"ts": 5, "event": "file_open"},
    ]


@pytest.fixture
def three_edit_context():
    return LogContext.from_text(
        to_jsonl(
            [
                edit(2000, "human", added=120),
                edit(3000, "ai", added=4000, deleted=800),
                edit(5000, "human", deleted=15, is_undo_like=True),
            ]
        )
    )


@pytest.fixture
def log_file(tmp_path, mixed_records):
    path = tmp_path / "session.jsonl"
    path.write_text(to_jsonl(mixed_records), encoding="utf-8")
    return path
