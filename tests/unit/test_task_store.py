"""
Tests for the task model and the persistent task store
"""

import json

import pytest

from zenith.tasks.model import TaskRecord, clamp_priority, parse_priority
from zenith.tasks.store import TaskStore
from zenith.tasks.view import progress_tier


class TestParsePriority:
    """Test the N:text priority shorthand"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("3:Deploy server", (3, "Deploy server")),
            ("  7:  spaced out  ", (7, "spaced out")),
            ("0:no priority", (0, "no priority")),
            ("3Deploy", (0, "3Deploy")),
            ("12:two digits", (0, "12:two digits")),
            ("a:letter", (0, "a:letter")),
            ("plain task", (0, "plain task")),
            ("5:", (5, "")),
            ("   ", (0, "")),
        ],
    )
    def test_parse(self, text, expected):
        """Test shorthand parsing across valid and non-matching inputs"""
        assert parse_priority(text) == expected

    def test_clamp_priority(self):
        """Test clamping into [0, 9]"""
        assert clamp_priority(15) == 9
        assert clamp_priority(-3) == 0
        assert clamp_priority(4) == 4

    def test_clamp_priority_rejects_non_integers(self):
        """Test that strings and booleans are not priorities"""
        with pytest.raises(ValueError):
            clamp_priority("3")
        with pytest.raises(ValueError):
            clamp_priority(True)


class TestTaskRecord:
    """Test TaskRecord conversion and derived properties"""

    def test_from_dict(self):
        """Test building a record from its stored form"""
        record = TaskRecord.from_dict({"text": "Deploy", "done": True, "priority": 2})
        assert record == TaskRecord("Deploy", done=True, priority=2)

    def test_from_dict_defaults(self):
        """Test that done and priority are optional"""
        record = TaskRecord.from_dict({"text": "Deploy"})
        assert record.done is False
        assert record.priority == 0

    def test_from_dict_clamps_priority(self):
        """Test that stored priorities are clamped"""
        assert TaskRecord.from_dict({"text": "x", "priority": 42}).priority == 9

    @pytest.mark.parametrize(
        "data",
        [
            {"done": False},
            {"text": ""},
            {"text": 7},
            {"text": "x", "done": "yes"},
            {"text": "x", "priority": "high"},
            ["not", "a", "dict"],
        ],
    )
    def test_from_dict_rejects_invalid(self, data):
        """Test that malformed records raise ValueError"""
        with pytest.raises(ValueError):
            TaskRecord.from_dict(data)

    def test_to_dict(self):
        """Test the stored form and its key order"""
        assert TaskRecord("Deploy", priority=3).to_dict() == {"text": "Deploy", "done": False, "priority": 3}

    @pytest.mark.parametrize(
        "priority,tier",
        [(0, "none"), (1, "high"), (3, "high"), (4, "mid"), (6, "mid"), (7, "low"), (9, "low")],
    )
    def test_priority_tier(self, priority, tier):
        """Test priority to tier mapping"""
        assert TaskRecord("x", priority=priority).priority_tier == tier

    def test_badge(self):
        """Test that only prioritized tasks carry a badge"""
        assert TaskRecord("x", priority=4).badge == "P4"
        assert TaskRecord("x").badge is None


class TestTaskStoreMutations:
    """Test store operations and their persistence side effects"""

    def test_insert_appends_pending_task(self, store, store_path):
        """Test that insert appends a pending record and saves"""
        record = store.insert("3:Deploy server")

        assert record == TaskRecord("Deploy server", done=False, priority=3)
        assert store.records == [record]
        assert store_path.exists()

    def test_insert_plain_text(self, store):
        """Test that plain text is trimmed and gets priority 0"""
        record = store.insert("  Buy milk  ")
        assert record.text == "Buy milk"
        assert record.priority == 0

    def test_insert_empty_is_noop(self, store, store_path):
        """Test that whitespace-only text adds nothing"""
        assert store.insert("   ") is None
        assert len(store) == 0
        assert not store_path.exists()

    def test_insert_shorthand_without_text_is_noop(self, store, store_path):
        """Test that a bare shorthand adds nothing"""
        assert store.insert("5:") is None
        assert len(store) == 0
        assert not store_path.exists()

    def test_insert_explicit_priority_is_clamped(self, store):
        """Test that an explicit priority is clamped"""
        assert store.insert("Deploy", priority=12).priority == 9

    def test_insert_shorthand_wins_over_explicit_priority(self, store):
        """Test that the shorthand overrides the priority argument"""
        assert store.insert("2:Deploy", priority=8).priority == 2

    def test_insert_keeps_full_text(self, store):
        """Test that stored text is never truncated"""
        text = "A" * 200
        assert store.insert(text).text == text

    def test_insert_undecodable_text_is_persisted(self, store, store_path):
        """Test that lone surrogates from stdin are replaced so the task still saves"""
        record = store.insert("bad \udcff text")

        assert record.text == "bad ? text"
        assert TaskStore.load(store_path).records == store.records
        assert [p.name for p in store_path.parent.iterdir()] == ["todos.json"]

    def test_toggle(self, sample_store):
        """Test flipping the done flag both ways"""
        assert sample_store.toggle(0) is True
        assert sample_store[0].done is True
        assert sample_store.toggle(0) is True
        assert sample_store[0].done is False

    def test_toggle_out_of_range_does_not_save(self, sample_store, store_path):
        """Test that an invalid index never writes the file"""
        assert sample_store.toggle(3) is False
        assert sample_store.toggle(-1) is False
        assert not store_path.exists()

    def test_move_up(self, sample_store):
        """Test swapping a task with its predecessor"""
        assert sample_store.move_up(2) is True
        assert [r.text for r in sample_store] == [
            "Deploy server",
            "Review pull request",
            "Write release notes",
        ]

    def test_move_up_first_is_noop(self, sample_store, store_path):
        """Test that the first task cannot move up"""
        assert sample_store.move_up(0) is False
        assert sample_store[0].text == "Deploy server"
        assert not store_path.exists()

    def test_move_up_out_of_range(self, sample_store):
        """Test that an out-of-range index is ignored"""
        assert sample_store.move_up(7) is False

    @pytest.mark.parametrize(
        "noop",
        [
            lambda s: s.move_up(0),
            lambda s: s.move_up(3),
            lambda s: s.move_up(-1),
            lambda s: s.toggle(3),
            lambda s: s.remove(9),
            lambda s: s.insert("   "),
        ],
        ids=["move_up_first", "move_up_past_end", "move_up_negative", "toggle_past_end", "remove_past_end", "insert_blank"],
    )
    def test_noop_leaves_saved_file_unchanged(self, sample_store, store_path, noop):
        """Test that a rejected operation keeps the persisted bytes and the records"""
        sample_store.save()
        before = store_path.read_bytes()
        records = [TaskRecord(**r.to_dict()) for r in sample_store]

        assert not noop(sample_store)

        assert store_path.read_bytes() == before
        assert sample_store.records == records

    def test_remove(self, sample_store):
        """Test deleting a task keeps the others in order"""
        assert sample_store.remove(1) is True
        assert [r.text for r in sample_store] == ["Deploy server", "Review pull request"]

    def test_remove_out_of_range(self, sample_store, store_path):
        """Test that an invalid index removes nothing"""
        assert sample_store.remove(3) is False
        assert len(sample_store) == 3
        assert not store_path.exists()

    def test_clear_done(self, sample_store):
        """Test removing completed tasks"""
        assert sample_store.clear_done() == 1
        assert all(not r.done for r in sample_store)
        assert sample_store.clear_done() == 0


class TestTaskStoreAggregates:
    """Test derived values"""

    def test_counts(self, sample_store):
        """Test pending, done and total counts"""
        assert sample_store.pending_count == 2
        assert sample_store.done_count == 1
        assert len(sample_store) == 3

    def test_top_task_skips_done(self, sample_store):
        """Test that the top task is the first pending one"""
        sample_store.toggle(0)
        assert sample_store.top_task().text == "Review pull request"

    def test_top_task_none_when_all_done(self, store):
        """Test that a fully done store has no top task"""
        store.insert("only")
        store.toggle(0)
        assert store.top_task() is None

    def test_completion_ratio(self, sample_store, store):
        """Test done / total, and 0 for an empty store"""
        assert sample_store.completion_ratio() == pytest.approx(1 / 3)
        assert store.completion_ratio() == 0.0

    @pytest.mark.parametrize("done,ratio,tier", [(3, 0.75, "high"), (2, 0.5, "mid"), (1, 0.25, "low")])
    def test_completion_tier_of_four_tasks(self, store, done, ratio, tier):
        """Test the progress tier of a four-task store as tasks get done"""
        for text in ("a", "b", "c", "d"):
            store.insert(text)
        for index in range(done):
            store.toggle(index)

        assert store.completion_ratio() == ratio
        assert progress_tier(store.completion_ratio()) == tier


OPERATIONS = {
    "insert": lambda s: s.insert("4:Rotate keys"),
    "toggle": lambda s: s.toggle(1),
    "move_up": lambda s: s.move_up(2),
    "remove": lambda s: s.remove(0),
    "clear_done": lambda s: s.clear_done(),
}


class TestTaskStorePersistence:
    """Test the JSON file format and failure handling"""

    @pytest.mark.parametrize("operation", list(OPERATIONS), ids=list(OPERATIONS))
    def test_reload_after_operation(self, sample_store, store_path, operation):
        """Test that the file matches memory right after a single operation"""
        sample_store.save()

        assert OPERATIONS[operation](sample_store)

        assert TaskStore.load(store_path).records == sample_store.records

    def test_reload_after_every_step(self, store, store_path):
        """Test that memory and disk agree after each step of a session"""
        steps = [
            lambda s: s.insert("3:Deploy server"),
            lambda s: s.insert("Write notes ✓ café"),
            lambda s: s.insert("9:Someday"),
            lambda s: s.toggle(1),
            lambda s: s.move_up(2),
            lambda s: s.remove(0),
            lambda s: s.toggle(0),
            lambda s: s.clear_done(),
            lambda s: s.remove(0),
        ]
        for step in steps:
            step(store)
            assert TaskStore.load(store_path).records == store.records

        assert len(store) == 0

    def test_file_format(self, store, store_path):
        """Test the on-disk JSON shape"""
        store.insert("3:Deploy server")

        raw = store_path.read_text(encoding="utf-8")
        assert json.loads(raw) == {"items": [{"text": "Deploy server", "done": False, "priority": 3}]}
        # Pretty-printed
        assert '\n  "items"' in raw

    def test_non_ascii_written_verbatim(self, store, store_path):
        """Test that non-ASCII text is not escaped"""
        store.insert("Café ✓")
        assert "Café ✓" in store_path.read_text(encoding="utf-8")

    def test_no_temporary_file_left_behind(self, store, store_path):
        """Test that the atomic write cleans up after itself"""
        store.insert("Deploy")
        assert [p.name for p in store_path.parent.iterdir()] == ["todos.json"]

    def test_save_creates_parent_directories(self, tmp_path):
        """Test that missing directories are created"""
        path = tmp_path / "a" / "b" / "todos.json"
        store = TaskStore(path)
        store.insert("Deploy")
        assert path.exists()

    def test_load_missing_file(self, store_path):
        """Test that a missing file gives an empty store"""
        store = TaskStore.load(store_path)
        assert len(store) == 0
        assert store.path == store_path

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            '{"items": {}}',
            '{"items": [{"text": ""}]}',
            '{"items": [{"text": "x", "done": 1}]}',
            "[" * 100000 + "]" * 100000,
        ],
        ids=["broken", "list", "items_not_list", "empty_text", "bad_done", "deeply_nested"],
    )
    def test_load_malformed_file_gives_empty_store(self, store_path, content, caplog):
        """Test that any malformed content loads as an empty store"""
        store_path.parent.mkdir(parents=True)
        store_path.write_text(content, encoding="utf-8")

        store = TaskStore.load(store_path)

        assert len(store) == 0
        assert "Could not load tasks" in caplog.text

    def test_load_invalid_utf8_gives_empty_store(self, store_path):
        """Test that a file with undecodable bytes loads as an empty store"""
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b'{"items": [{"text": "\xff"}]}')

        assert len(TaskStore.load(store_path)) == 0

    def test_load_tolerates_missing_optional_fields(self, store_path):
        """Test loading records written without done or priority"""
        store_path.parent.mkdir(parents=True)
        store_path.write_text('{"items": [{"text": "legacy"}]}', encoding="utf-8")

        store = TaskStore.load(store_path)
        assert store.records == [TaskRecord("legacy", done=False, priority=0)]

    def test_save_failure_is_absorbed(self, tmp_path, caplog):
        """Test that an unwritable location keeps the session going"""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = TaskStore(blocker / "todos.json")

        record = store.insert("Deploy")

        assert record is not None
        assert store.records == [record]
        assert store.save() is False
        assert "Failed to save tasks" in caplog.text

    def test_unencodable_save_is_absorbed(self, store, store_path, caplog):
        """Test that an encoding failure is logged and leaves no temporary file"""
        store.records.append(TaskRecord("bad \udcff text"))

        assert store.save() is False
        assert "Failed to save tasks" in caplog.text
        assert list(store_path.parent.iterdir()) == []

    def test_default_path(self, isolated_config_home):
        """Test the XDG default location"""
        assert TaskStore().path == isolated_config_home / "todos.json"
