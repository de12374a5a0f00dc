import pytest
from werkzeug.datastructures import LanguageAccept

from healthcounters.api.utils import i18n


@pytest.mark.parametrize("header,expected", [
    ("pl-PL,pl;q=0.9,en-US;q=0.8,en;q=0.7", "pl"),
    ("pl", "pl"),
    ("en-US,en;q=0.9,pl;q=0.8", "en"),
    ("de-DE,pl;q=0.5", "pl"),
    ("de-DE,fr;q=0.5", "en"),
    ("*", "en"),
    ("", "en"),
    (None, "en"),
])
def test_detect_language(header, expected):
    assert i18n.detect_language(header) == expected


def test_detect_language_accepts_parsed_header():
    assert i18n.detect_language(LanguageAccept([("pl-PL", 1), ("en", 0.5)])) == "pl"
    assert i18n.detect_language(LanguageAccept()) == "en"


def test_next_language_flips():
    assert i18n.next_language("en") == "pl"
    assert i18n.next_language("pl") == "en"
    assert i18n.next_language("xx") == "pl"


def test_format_date():
    assert i18n.format_date("2024-01-01", "en") == "January 1, 2024"
    assert i18n.format_date("2024-09-15", "pl") == "15 września 2024"
    assert i18n.format_date("2024-09-15", "xx") == "September 15, 2024"
    assert i18n.format_date("someday", "pl") == "someday"


def test_status_labels_follow_flag():
    assert i18n.status_labels(True)["counter"]["en"] == "Days healthy"
    assert i18n.status_labels(False)["badge"]["pl"] == "W trakcie leczenia"


def test_translation_values_cover_both_languages():
    values = i18n.translation_values(False, "pl")
    assert values["TITLE"] == "Liczniki zdrowia"
    assert values["TITLE_EN"] == "Health Counters"
    assert values["HEALTHY_LABEL"] == "Dni od zachorowania"
    assert values["HEALTHY_LABEL_EN"] == "Days since getting sick"
    for key in i18n.TRANSLATIONS:
        assert {key.upper(), f"{key.upper()}_EN", f"{key.upper()}_PL"} <= set(values)
