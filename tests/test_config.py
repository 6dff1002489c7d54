import pytest
from pydantic import ValidationError

from adapters.expression_reader import RingDrivenExpressionReader
from adapters.algebra import IntegerDomain
from adapters.conversion import IntegerIdentityConversion
from adapters.leaf_parsers import IntegerParser
from adapters.symbol_sources import StringSymbolReader
from config import MAX_NESTING_DEPTH, Settings, get_settings


def _reader():
    return RingDrivenExpressionReader(IntegerParser(), IntegerDomain(), IntegerIdentityConversion())


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("RINGREADER_MAX_NESTING_DEPTH", raising=False)

    settings = Settings(_env_file=None)

    assert settings.max_nesting_depth == 200
    assert "blancks" in settings.ignorable_tags
    assert settings.end_of_stream_tag == "eof"


def test_nesting_depth_comes_from_environment(monkeypatch):
    monkeypatch.setenv("RINGREADER_MAX_NESTING_DEPTH", "3")
    get_settings.cache_clear()
    try:
        reader = _reader()

        assert reader.parse("((1))") == 1
        assert reader.try_parse("((((1))))").issues[0].code == "NESTING_TOO_DEEP"
    finally:
        get_settings.cache_clear()


def test_ignorable_tags_come_from_environment(monkeypatch):
    monkeypatch.setenv("RINGREADER_IGNORABLE_TAGS", '["space"]')
    get_settings.cache_clear()
    try:
        reader = _reader()

        assert reader.parse(StringSymbolReader("1 + 2", join_blanks=False)) == 3
        assert reader.try_parse("1 + 2").success is False
    finally:
        get_settings.cache_clear()


def test_end_of_stream_tag_comes_from_environment(monkeypatch):
    monkeypatch.setenv("RINGREADER_END_OF_STREAM_TAG", "end")
    get_settings.cache_clear()
    try:
        reader = StringSymbolReader("1")
        reader.consume()

        assert reader.peek().kind == "end"
        assert _reader().parse("6*7") == 42
    finally:
        get_settings.cache_clear()


@pytest.mark.parametrize("value", ["0", str(MAX_NESTING_DEPTH + 1), "5000"])
def test_nesting_depth_outside_supported_range_is_rejected(monkeypatch, value):
    monkeypatch.setenv("RINGREADER_MAX_NESTING_DEPTH", value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
