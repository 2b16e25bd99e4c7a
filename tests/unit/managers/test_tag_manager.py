"""
test_tag_manager.py
-------------------
Unit tests for TagManager operations.

Tags are the simplest entity in the system: a unique string with a
many-to-many relationship to entries, created and pruned as a side
effect of entry changes.
"""
import pytest
from sqlalchemy import func, select

from daybook.core.exceptions import ValidationError
from daybook.database.models import Entry, Tag


def count_tags(session):
    return session.scalar(select(func.count()).select_from(Tag))


class TestTagManagerGetOrCreate:
    """Test TagManager.get_or_create() method."""

    def test_creates_new_tag(self, tag_manager):
        tag = tag_manager.get_or_create("python")
        assert tag.id is not None
        assert tag.tag == "python"

    def test_same_text_twice_returns_same_row(self, tag_manager, db_session):
        first = tag_manager.get_or_create("python")
        second = tag_manager.get_or_create("python")

        assert first.id == second.id
        assert count_tags(db_session) == 1

    def test_normalizes_whitespace(self, tag_manager, db_session):
        first = tag_manager.get_or_create("  python ")
        second = tag_manager.get_or_create("python")
        assert first.tag == "python"
        assert first.id == second.id
        assert count_tags(db_session) == 1

    def test_case_is_preserved(self, tag_manager, db_session):
        upper = tag_manager.get_or_create("Python")
        lower = tag_manager.get_or_create("python")
        assert upper.id != lower.id
        assert count_tags(db_session) == 2

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_raises(self, tag_manager, value):
        with pytest.raises(ValidationError, match="Tag cannot be empty"):
            tag_manager.get_or_create(value)


class TestTagManagerGet:
    """Test TagManager lookup methods."""

    def test_get_returns_none_when_not_found(self, tag_manager):
        assert tag_manager.get("nonexistent") is None

    def test_get_returns_tag_when_found(self, tag_manager, db_session):
        db_session.add(Tag(tag="python"))
        db_session.flush()

        result = tag_manager.get("  python  ")
        assert result is not None
        assert result.tag == "python"

    def test_get_empty_returns_none(self, tag_manager):
        assert tag_manager.get("") is None

    def test_get_by_id(self, tag_manager):
        tag = tag_manager.get_or_create("python")
        assert tag_manager.get_by_id(tag.id) is tag
        assert tag_manager.get_by_id(9999) is None

    def test_get_all_sorted(self, tag_manager):
        for name in ["zen", "art", "music"]:
            tag_manager.get_or_create(name)
        assert [t.tag for t in tag_manager.get_all()] == ["art", "music", "zen"]

    def test_get_with_counts(self, tag_manager, db_session):
        work = tag_manager.get_or_create("work")
        ideas = tag_manager.get_or_create("ideas")
        tag_manager.get_or_create("unused")
        db_session.add_all(
            [Entry(title="a", tags=[work, ideas]), Entry(title="b", tags=[work])]
        )
        db_session.flush()

        counts = [(tag.tag, n) for tag, n in tag_manager.get_with_counts()]
        assert counts == [("work", 2), ("ideas", 1), ("unused", 0)]


class TestTagManagerReplaceEntryTags:
    """Test TagManager.replace_entry_tags() method."""

    @pytest.fixture
    def entry(self, db_session):
        entry = Entry(title="Lunch", content="")
        db_session.add(entry)
        db_session.flush()
        return entry

    def test_sets_tags_on_untagged_entry(self, tag_manager, entry):
        removed = tag_manager.replace_entry_tags(entry, ["a", "b"])
        assert removed == []
        assert sorted(t.tag for t in entry.tags) == ["a", "b"]

    def test_returns_removed_tags(self, tag_manager, entry):
        tag_manager.replace_entry_tags(entry, ["Turkey", "Cheese"])
        removed = tag_manager.replace_entry_tags(entry, ["chicken", "salad"])

        assert sorted(t.tag for t in removed) == ["Cheese", "Turkey"]
        assert sorted(t.tag for t in entry.tags) == ["chicken", "salad"]

    def test_kept_tag_is_not_detached(self, tag_manager, entry):
        tag_manager.replace_entry_tags(entry, ["keep", "drop"])
        kept = tag_manager.get("keep")

        removed = tag_manager.replace_entry_tags(entry, ["keep", "add"])

        assert [t.tag for t in removed] == ["drop"]
        assert kept in entry.tags
        assert tag_manager.get("keep").id == kept.id

    def test_duplicates_collapsed(self, tag_manager, entry):
        tag_manager.replace_entry_tags(entry, ["a", " a", "a "])
        assert [t.tag for t in entry.tags] == ["a"]

    def test_unpersisted_entry_rejected(self, tag_manager):
        with pytest.raises(ValidationError):
            tag_manager.replace_entry_tags(Entry(title="new"), ["a"])


class TestTagManagerPruneOrphans:
    """Test TagManager.prune_orphans() method."""

    def test_deletes_only_unused_tags(self, tag_manager, db_session):
        used = tag_manager.get_or_create("used")
        tag_manager.get_or_create("orphan1")
        tag_manager.get_or_create("orphan2")
        db_session.add(Entry(title="a", tags=[used]))
        db_session.flush()

        assert tag_manager.prune_orphans() == 2
        assert [t.tag for t in tag_manager.get_all()] == ["used"]

    def test_nothing_to_prune(self, tag_manager):
        assert tag_manager.prune_orphans() == 0
