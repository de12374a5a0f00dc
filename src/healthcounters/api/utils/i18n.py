from werkzeug.datastructures import LanguageAccept
from werkzeug.http import parse_accept_header

from ...counters.days import parse_start_date

DEFAULT_LANGUAGE = "en"

LANGUAGES = {
    "en": {"code": "en", "name": "English", "flag": "🇺🇸"},
    "pl": {"code": "pl", "name": "Polski", "flag": "🇵🇱"},
}

MONTHS = {
    "en": ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"],
    # genitive, as used in "1 stycznia 2024"
    "pl": ["stycznia", "lutego", "marca", "kwietnia", "maja", "czerwca", "lipca",
           "sierpnia", "września", "października", "listopada", "grudnia"],
}

# static UI text; keys become {{KEY}}, {{KEY_EN}} and {{KEY_PL}} placeholders
TRANSLATIONS = {
    "title": {"en": "Health Counters", "pl": "Liczniki zdrowia"},
    "heading": {"en": "Health Dashboard", "pl": "Panel zdrowia"},
    "doctor_label": {"en": "Days since doctor visit", "pl": "Dni od wizyty u lekarza"},
    "days": {"en": "days", "pl": "dni"},
    "since": {"en": "Since", "pl": "Od"},
    "footer": {"en": "Counters refresh automatically", "pl": "Liczniki odświeżają się automatycznie"},
}

# status flag -> label text per language
STATUS_LABELS = {
    True: {
        "counter": {"en": "Days healthy", "pl": "Dni zdrowia"},
        "badge": {"en": "Healthy", "pl": "Zdrowy"},
    },
    False: {
        "counter": {"en": "Days since getting sick", "pl": "Dni od zachorowania"},
        "badge": {"en": "Recovering", "pl": "W trakcie leczenia"},
    },
}


def normalize(lang) -> str:
    return lang if lang in LANGUAGES else DEFAULT_LANGUAGE


def detect_language(accept_languages) -> str:
    """
    Pick the first-paint language from an Accept-Language header.

    Takes request.accept_languages or a raw header string. The highest-ranked
    entry whose primary tag we support wins (pl-PL counts as pl); no match
    means English.
    """
    if isinstance(accept_languages, str):
        accept_languages = parse_accept_header(accept_languages, LanguageAccept)
    for tag, _quality in accept_languages or ():
        primary = tag.lower().replace("_", "-").split("-")[0]
        if primary in LANGUAGES:
            return primary
    return DEFAULT_LANGUAGE


def next_language(lang: str) -> str:
    return "pl" if normalize(lang) == "en" else "en"


def status_labels(is_healthy: bool) -> dict:
    return STATUS_LABELS[bool(is_healthy)]


def format_date(iso: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """January 1, 2024 / 1 stycznia 2024. Unparseable input comes back unchanged."""
    d = parse_start_date(iso)
    if d is None:
        return iso
    month = MONTHS[normalize(lang)][d.month - 1]
    if normalize(lang) == "pl":
        return f"{d.day} {month} {d.year}"
    return f"{month} {d.day}, {d.year}"


def translation_values(is_healthy: bool, lang: str) -> dict:
    """Placeholder values for every translatable string: first-paint text plus both data-* variants."""
    lang = normalize(lang)
    table = dict(TRANSLATIONS)
    labels = status_labels(is_healthy)
    table["healthy_label"] = labels["counter"]
    table["status"] = labels["badge"]

    values = {}
    for key, texts in table.items():
        name = key.upper()
        values[name] = texts[lang]
        for code in LANGUAGES:
            values[f"{name}_{code.upper()}"] = texts[code]
    return values
