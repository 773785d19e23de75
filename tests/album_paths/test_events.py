"""Tests for resolution events."""

import logging

from catalog_publish.album_paths.events import EventRecorder, ResolutionEvent, emit, log_event


class TestEmit:
    """Tests for emit function."""

    def test_callback_receives_event(self):
        """Test that the injected callback gets the event."""
        recorder = EventRecorder()
        emit(recorder, logging.INFO, "Something", key="value")
        assert recorder.events == [ResolutionEvent(logging.INFO, "Something", {"key": "value"})]

    def test_default_forwards_to_logger(self, caplog):
        """Test that without a callback events are logged."""
        with caplog.at_level(logging.DEBUG, logger="catalog_publish.album_paths"):
            emit(None, logging.DEBUG, "Collection path", path="a/b")

        record = caplog.records[0]
        assert record.name == "catalog_publish.album_paths"
        assert record.levelno == logging.DEBUG
        assert record.message == "Collection path: {'path': 'a/b'}"
        assert record.extra_fields == {"path": "a/b"}


class TestLogEvent:
    """Tests for log_event function."""

    def test_below_level_dropped(self, caplog):
        """Test that disabled levels are not logged."""
        with caplog.at_level(logging.WARNING, logger="catalog_publish.album_paths"):
            log_event(ResolutionEvent(logging.DEBUG, "quiet"))
        assert caplog.records == []


class TestEventRecorder:
    """Tests for EventRecorder."""

    def test_filters(self):
        """Test message and level filters."""
        recorder = EventRecorder()
        recorder(ResolutionEvent(logging.DEBUG, "a"))
        recorder(ResolutionEvent(logging.WARNING, "b", {"x": 1}))
        recorder(ResolutionEvent(logging.DEBUG, "a", {"y": 2}))

        assert recorder.messages() == ["a", "b", "a"]
        assert recorder.messages(logging.WARNING) == ["b"]
        assert [e.context for e in recorder.find("a")] == [{}, {"y": 2}]
