"""Tests for keyword reconciliation."""

import logging

from catalog_publish.album_paths.events import EventRecorder
from catalog_publish.album_paths.keywords import (
    KeywordDelta,
    apply_keyword_delta,
    get_modified_keywords,
    keyword_delta,
)
from catalog_publish.album_paths.models import CatalogPhoto, Keyword


class RecordingPhoto(CatalogPhoto):
    """Photo that records mutation calls."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def add_tag(self, name):
        self.calls.append(("add", name))
        super().add_tag(name)

    def remove_tag(self, tag):
        self.calls.append(("remove", tag.get_name()))
        super().remove_tag(tag)


class TestKeywordDelta:
    """Tests for keyword_delta function."""

    def test_add_and_remove(self):
        """Test the basic add/remove delta."""
        tag_a, tag_b, tag_c = Keyword("A"), Keyword("B"), Keyword("C")
        delta = keyword_delta([tag_a, tag_b, tag_c], ["B", "C", "D"])

        assert delta.names_to_add == ("D",)
        assert delta.names_to_remove == ("A",)
        assert delta.objects_to_remove[0] is tag_a
        assert len(delta.objects_to_remove) == 1

    def test_order_preserved(self):
        """Test that both outputs keep their input order."""
        tags = [Keyword("z"), Keyword("keep"), Keyword("a")]
        delta = keyword_delta(tags, ["y", "keep", "b", "x"])

        assert delta.names_to_add == ("y", "b", "x")
        assert delta.names_to_remove == ("z", "a")
        assert [t.get_name() for t in delta.objects_to_remove] == ["z", "a"]

    def test_duplicate_current_tags_each_removed(self):
        """Test that every tag object with an undesired name is removed."""
        first, second = Keyword("old"), Keyword("old")
        delta = keyword_delta([first, Keyword("new"), second], ["new"])

        assert delta.names_to_remove == ("old", "old")
        assert delta.objects_to_remove[0] is first
        assert delta.objects_to_remove[1] is second

    def test_duplicate_desired_names_each_added(self):
        """Test that desired duplicates without a tag are each listed."""
        delta = keyword_delta([], ["x", "x"])
        assert delta.names_to_add == ("x", "x")

    def test_case_sensitive(self):
        """Test that names are compared exactly."""
        delta = keyword_delta([Keyword("Paris")], ["paris"])
        assert delta.names_to_add == ("paris",)
        assert delta.names_to_remove == ("Paris",)

    def test_no_change(self):
        """Test that an identical set gives an empty delta."""
        delta = keyword_delta([Keyword("a"), Keyword("b")], ["b", "a"])
        assert delta.is_empty
        assert delta == KeywordDelta()

    def test_desired_names_iterable(self):
        """Test that a generator of names is accepted."""
        delta = keyword_delta([Keyword("a")], (name for name in ["a", "b"]))
        assert delta.names_to_add == ("b",)
        assert delta.names_to_remove == ()

    def test_get_modified_keywords(self):
        """Test that the photo's own tags are diffed."""
        photo = CatalogPhoto("id", keywords=[Keyword("A"), Keyword("B")])
        delta = get_modified_keywords(photo, ["B", "C"])
        assert delta.names_to_add == ("C",)
        assert delta.names_to_remove == ("A",)


class TestApplyKeywordDelta:
    """Tests for apply_keyword_delta function."""

    def test_mutations_in_order(self):
        """Test that additions run before removals, each in delta order."""
        photo = RecordingPhoto("id", keywords=[Keyword("A"), Keyword("B"), Keyword("C")])
        delta = get_modified_keywords(photo, ["C", "D", "E"])

        applied = apply_keyword_delta(photo, delta, on_event=EventRecorder())

        assert applied is delta
        assert photo.calls == [("add", "D"), ("add", "E"), ("remove", "A"), ("remove", "B")]
        assert [k.get_name() for k in photo.get_current_tags()] == ["C", "D", "E"]

    def test_removes_by_identity(self):
        """Test that only the listed tag objects are removed."""
        keep, drop = Keyword("dup"), Keyword("dup")
        photo = CatalogPhoto("id", keywords=[keep, drop])
        apply_keyword_delta(photo, KeywordDelta(objects_to_remove=(drop,), names_to_remove=("dup",)))
        assert photo.get_current_tags() == [keep]

    def test_event_for_changes(self):
        """Test that an applied change is reported."""
        recorder = EventRecorder()
        photo = CatalogPhoto("photo-1", keywords=[Keyword("A")])
        apply_keyword_delta(photo, get_modified_keywords(photo, ["B"]), on_event=recorder)

        event = recorder.find("Keywords updated")[0]
        assert event.level == logging.INFO
        assert event.context == {"photo": "photo-1", "added": ["B"], "removed": ["A"]}

    def test_no_event_for_empty_delta(self):
        """Test that an empty delta is silent."""
        recorder = EventRecorder()
        apply_keyword_delta(CatalogPhoto("id"), KeywordDelta(), on_event=recorder)
        assert recorder.events == []
