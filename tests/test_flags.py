import pytest

from columnplot.app import flags


def test_flags_parse_tokens(monkeypatch):
    monkeypatch.setenv(flags.ENV_VAR, "debug-render, !column_select, extra=yes, junk=maybe")
    flags.reload()

    assert flags.all_enabled() == {"debug_render": True, "column_select": False, "extra": True}
    assert flags.is_enabled("DEBUG_RENDER")
    assert not flags.is_enabled("column_select", default=True)


def test_unknown_flag_uses_default():
    assert flags.is_enabled("column_select", default=True)
    assert not flags.is_enabled("column_select")


def test_empty_flag_name_is_rejected():
    with pytest.raises(ValueError):
        flags.is_enabled("")
