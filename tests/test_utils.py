import asyncio
import logging

from ldexplorer.config import CONFIG, get_setting
from ldexplorer.utils import _local_name, _pick_label_color, _shorten_iri, profile_time


def test_local_name_and_shortening():
    assert _local_name("http://example.org/people#alice") == "alice"
    assert _local_name("http://example.org/people/bob/") == "bob"
    assert _local_name("ex:carol") == "carol"
    assert _local_name("") == "Unknown"
    assert _shorten_iri("http://www.w3.org/2000/01/rdf-schema#label") == "rdfs:label"
    assert _shorten_iri("http://example.org/x") == "http://example.org/x"
    assert _shorten_iri("http://example.org/" + "a" * 100 + "/leaf", max_len=40).startswith("leaf (http://")
    assert len(_shorten_iri("http://example.org/" + "a" * 100 + "/leaf", max_len=40)) <= 40


def test_pick_label_color_contrasts_with_background():
    assert _pick_label_color("#FFFFFF") == "#0B0B0B"
    assert _pick_label_color("#111111") == "#F8F6F1"
    assert _pick_label_color("not-a-colour") == "#0B0B0B"


def test_get_setting_reads_environment(monkeypatch):
    monkeypatch.setenv("LDX_RESULT_LIMIT", "7")
    assert get_setting("RESULT_LIMIT") == "7"

    monkeypatch.delenv("LDX_RESULT_LIMIT")
    assert get_setting("RESULT_LIMIT") == CONFIG["RESULT_LIMIT"]
    assert get_setting("NOT_A_SETTING", "fallback") == "fallback"


def test_profile_time_wraps_sync_and_async(caplog):
    @profile_time
    def add(a, b):
        return a + b

    @profile_time
    async def double(value):
        return value * 2

    with caplog.at_level(logging.INFO):
        assert add(1, 2) == 3
        assert asyncio.run(double(4)) == 8

    messages = [r.getMessage() for r in caplog.records if "[PROFILE]" in r.getMessage()]
    assert any("'add'" in m for m in messages)
    assert any("'double'" in m for m in messages)
