"""Tests for the Config stream cursor."""

import pytest

from cfgscope import Config, ConfigError, ConfigOpenError, KeyValue


class TestOpenClose:
    def test_open_starts_at_line_zero(self, open_config):
        config = open_config("a = 1\n")
        assert config.line == 0
        assert config.isolation_end == -1
        assert config.error_message is None
        assert not config.closed

    def test_open_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigOpenError) as excinfo:
            Config.open(tmp_path / "missing.conf")
        assert isinstance(excinfo.value, ConfigError)
        assert isinstance(excinfo.value.__cause__, OSError)
        assert "missing.conf" in str(excinfo.value)

    def test_close_is_idempotent(self, open_config):
        config = open_config("a = 1\n")
        config.close()
        config.close()
        assert config.closed

    def test_read_after_close_returns_none(self, open_config):
        config = open_config("a = 1\n")
        config.close()
        assert config.read_raw_line() is None
        assert config.read_line() is None

    def test_context_manager_closes(self, write_config):
        path = write_config("a = 1\n")
        with Config.open(path) as config:
            assert config.read_line() == KeyValue("a", "1")
        assert config.closed

    def test_error_message_survives_close(self, write_config):
        with Config.open(write_config("oops\n")) as config:
            assert config.read_line() is None
        assert config.error_message == "Expecting section or key=value"


class TestReadRawLine:
    def test_counts_physical_lines(self, open_config):
        config = open_config("first\n\nthird\n")
        assert config.read_raw_line() == "first\n"
        assert config.read_raw_line() == "\n"
        assert config.read_raw_line() == "third\n"
        assert config.read_raw_line() is None
        assert config.line == 3

    def test_last_line_without_newline(self, open_config):
        config = open_config("a = 1")
        assert config.read_raw_line() == "a = 1"
        assert config.read_raw_line() is None

    def test_isolation_end_bounds_reads(self, open_config):
        config = open_config("one\ntwo\nthree\n")
        config.isolation_end = len(b"one\ntwo\n")
        assert config.read_raw_line() == "one\n"
        # The read of "two" ends exactly at the bound.
        assert config.read_raw_line() is None
        assert config.line == 1

    def test_invalid_utf8_is_replaced(self, tmp_path):
        path = tmp_path / "latin.conf"
        path.write_bytes(b"name = caf\xe9\n")
        with Config.open(path) as config:
            assert config.read_raw_line() == "name = caf\ufffd\n"

    def test_custom_encoding(self, tmp_path):
        path = tmp_path / "latin.conf"
        path.write_bytes(b"name = caf\xe9\n")
        with Config.open(path, encoding="latin-1") as config:
            assert config.read_line() == KeyValue("name", "caf\xe9")

    def test_read_failure_is_sticky(self, open_config, monkeypatch):
        config = open_config("a = 1\nb = 2\n")
        monkeypatch.setattr(config, "_file", _FailingFile(config._file, "readline"))
        assert config.read_raw_line() is None
        assert config.error_message.startswith("Could not read from file")
        assert config.line == 0

        monkeypatch.setattr(config, "_file", config._file.wrapped)
        assert config.read_raw_line() is None
        assert config.read_line() is None
        assert config.line == 0

    def test_position_failure_is_sticky(self, open_config, monkeypatch):
        config = open_config("a = 1\nb = 2\n")
        config.isolation_end = 100
        monkeypatch.setattr(config, "_file", _FailingFile(config._file, "tell"))
        assert config.read_raw_line() is None
        assert config.error_message == "Could not obtain file position"
        assert config.line == 0
        assert config.read_line() is None

    def test_position_not_queried_without_bound(self, open_config, monkeypatch):
        config = open_config("a = 1\n")
        monkeypatch.setattr(config, "_file", _FailingFile(config._file, "tell"))
        assert config.read_raw_line() == "a = 1\n"
        assert config.error_message is None


class _FailingFile:
    """Wraps a binary file so that one method raises OSError."""

    def __init__(self, wrapped, failing: str) -> None:
        self.wrapped = wrapped
        self.failing = failing

    def _call(self, name, *args):
        if name == self.failing:
            raise OSError(5, "Input/output error")
        return getattr(self.wrapped, name)(*args)

    def readline(self):
        return self._call("readline")

    def tell(self):
        return self._call("tell")

    def seek(self, offset):
        return self._call("seek", offset)

    def close(self):
        self.wrapped.close()


class TestStickyError:
    def test_first_error_wins(self, open_config):
        config = open_config("a = 1\n")
        assert config.set_error("first") is True
        assert config.set_error("second") is False
        assert config.error_message == "first"

    def test_formatting_arguments(self, open_config):
        config = open_config("a = 1\n")
        config.set_error("bad value %r on line %d", "x", 3)
        assert config.error_message == "bad value 'x' on line 3"

    def test_reads_fail_once_error_is_set(self, open_config):
        config = open_config("a = 1\nb = 2\n")
        config.set_error("stop")
        assert config.read_raw_line() is None
        assert config.read_line() is None
        assert list(config) == []
        assert config.line == 0
        assert config.tell() == 0

    def test_error_is_logged_with_position(self, open_config, caplog):
        config = open_config("a = 1\n")
        config.read_raw_line()
        with caplog.at_level("DEBUG", logger="cfgscope.config"):
            config.set_error("broken")
        assert ":1: broken" in caplog.text


class TestIteration:
    def test_iterates_classified_lines(self, open_config):
        config = open_config("""\
            a = 1
            # comment only

            b = 2
        """)
        assert list(config) == [KeyValue("a", "1"), KeyValue("b", "2")]
        assert config.line == 4
