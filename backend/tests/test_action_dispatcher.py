"""Tests for action dispatch — keyword lookup and field aggregation."""

from unittest.mock import MagicMock

import pytest

from servantfs.exceptions import ActionRequestError, FieldValidationError
from servantfs.services.action_dispatcher import ActionDispatcher, FileAction, parse_bool
from servantfs.services.copy_engine import CopyResult


@pytest.fixture
def engine():
    mock = MagicMock()
    mock.copy.return_value = CopyResult(kind="file", files_copied=1, bytes_copied=3)
    return mock


@pytest.fixture
def dispatcher(engine):
    return ActionDispatcher(engine)


class TestActionKeyword:
    @pytest.mark.parametrize("action", [None, "", "   "])
    def test_missing_action(self, dispatcher, engine, action):
        with pytest.raises(ActionRequestError) as exc_info:
            dispatcher.dispatch(action, {"sourcePath": "/a", "destPath": "/b"})
        assert exc_info.value.message == "A value for action is not provided."
        engine.copy.assert_not_called()

    def test_unknown_action(self, dispatcher, engine):
        with pytest.raises(ActionRequestError) as exc_info:
            dispatcher.dispatch("unknown", {"sourcePath": "/a", "destPath": "/b"})
        assert exc_info.value.message == "Unknown action command - 'unknown'."
        engine.copy.assert_not_called()

    def test_unknown_action_message_is_trimmed(self, dispatcher, engine):
        with pytest.raises(ActionRequestError) as exc_info:
            dispatcher.dispatch("  unknown \t", {"sourcePath": "/a", "destPath": "/b"})
        assert exc_info.value.message == "Unknown action command - 'unknown'."
        engine.copy.assert_not_called()

    def test_unknown_action_checked_before_fields(self, dispatcher):
        with pytest.raises(ActionRequestError):
            dispatcher.dispatch("MOVE", {})

    @pytest.mark.parametrize("action", ["COPY", "copy", " Copy "])
    def test_case_insensitive(self, dispatcher, engine, action):
        result = dispatcher.dispatch(action, {"sourcePath": "/a", "destPath": "/b"})
        assert result.action is FileAction.COPY
        engine.copy.assert_called_once()


class TestCopyParameters:
    def test_delegates_with_validated_paths(self, dispatcher, engine):
        result = dispatcher.dispatch("COPY", {"sourcePath": "/src/1.txt", "destPath": "/dst/2.txt"})

        source, dest, overwrite = engine.copy.call_args.args
        assert str(source) == "/src/1.txt"
        assert str(dest) == "/dst/2.txt"
        assert overwrite is False
        assert result.outcome.files_copied == 1

    @pytest.mark.parametrize("key", ["sourcepath", "SourcePath", "source_path"])
    def test_parameter_keys_are_case_insensitive(self, dispatcher, engine, key):
        dispatcher.dispatch("COPY", {key: "/a", "DESTPATH": "/b", "Overwrite": "true"})
        assert engine.copy.call_args.args[2] is True

    def test_missing_source(self, dispatcher, engine):
        with pytest.raises(FieldValidationError) as exc_info:
            dispatcher.dispatch("COPY", {"destPath": "/b"})
        assert list(exc_info.value.errors) == ["SourcePath"]
        engine.copy.assert_not_called()

    def test_missing_dest(self, dispatcher):
        with pytest.raises(FieldValidationError) as exc_info:
            dispatcher.dispatch("COPY", {"sourcePath": "/a"})
        assert list(exc_info.value.errors) == ["DestPath"]

    def test_all_field_errors_reported_together(self, dispatcher, engine):
        with pytest.raises(FieldValidationError) as exc_info:
            dispatcher.dispatch("COPY", {"sourcePath": "rel", "destPath": "/<b>", "overwrite": "maybe"})
        assert set(exc_info.value.errors) == {"SourcePath", "DestPath", "Overwrite"}
        engine.copy.assert_not_called()


class TestParseBool:
    @pytest.mark.parametrize("raw", ["true", "True", "1", "yes", "on"])
    def test_true(self, raw):
        assert parse_bool(raw, "Overwrite") is True

    @pytest.mark.parametrize("raw", [None, "", "false", "0", "no", "off"])
    def test_false(self, raw):
        assert parse_bool(raw, "Overwrite") is False

    def test_invalid(self):
        with pytest.raises(FieldValidationError) as exc_info:
            parse_bool("sometimes", "Overwrite")
        assert "Overwrite" in exc_info.value.errors
