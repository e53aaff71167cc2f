"""ISO 639 language code equivalences.

Values recorded by different tools rarely agree on a language code: the same
French title may be tagged ``fr``, ``fre``, ``fra`` or ``fr_FR``.  This module
holds a static table relating the ISO 639-1, ISO 639-2/B, ISO 639-2/T and
ISO 639-3 codes of a language, plus the membership of individual languages in
their ISO 639-3 macrolanguage, and expands a locale to every code that should
be accepted alongside it.

Expansion rules:

* the input locale itself is always part of the result;
* a region subtag is dropped for the lookup (``pt_BR`` → ``pt``) and the bare
  language subtag is added;
* a macrolanguage expands to all its individual languages
  (``zh`` → ``cmn``, ``yue``, ...);
* an individual language expands to its macrolanguage codes but not to its
  siblings (``cmn`` → ``zh``, ``zho``, ``chi``; never ``yue``).

The lookup table is built once at import time and exposed read-only.

Examples:
    ```python
    from interlang.i18n.iso639 import expand

    expand("fr")     # frozenset({'fr', 'fra', 'fre'})
    expand("fr_CA")  # frozenset({'fr_CA', 'fr', 'fra', 'fre'})
    expand("xx")     # frozenset({'xx'})
    ```
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final


# (ISO 639-1, ISO 639-2/B, ISO 639-2/T, ISO 639-3); "" when a part has no code
_LANGUAGES: Final[tuple[tuple[str, str, str, str], ...]] = (
    ("af", "afr", "afr", "afr"),  # Afrikaans
    ("am", "amh", "amh", "amh"),  # Amharic
    ("ar", "ara", "ara", "ara"),  # Arabic
    ("az", "aze", "aze", "aze"),  # Azerbaijani
    ("be", "bel", "bel", "bel"),  # Belarusian
    ("bg", "bul", "bul", "bul"),  # Bulgarian
    ("bn", "ben", "ben", "ben"),  # Bengali
    ("br", "bre", "bre", "bre"),  # Breton
    ("bs", "bos", "bos", "bos"),  # Bosnian
    ("ca", "cat", "cat", "cat"),  # Catalan
    ("co", "cos", "cos", "cos"),  # Corsican
    ("cs", "cze", "ces", "ces"),  # Czech
    ("cy", "wel", "cym", "cym"),  # Welsh
    ("da", "dan", "dan", "dan"),  # Danish
    ("de", "ger", "deu", "deu"),  # German
    ("el", "gre", "ell", "ell"),  # Modern Greek
    ("en", "eng", "eng", "eng"),  # English
    ("eo", "epo", "epo", "epo"),  # Esperanto
    ("es", "spa", "spa", "spa"),  # Spanish
    ("et", "est", "est", "est"),  # Estonian
    ("eu", "baq", "eus", "eus"),  # Basque
    ("fa", "per", "fas", "fas"),  # Persian
    ("fi", "fin", "fin", "fin"),  # Finnish
    ("fr", "fre", "fra", "fra"),  # French
    ("ga", "gle", "gle", "gle"),  # Irish
    ("gd", "gla", "gla", "gla"),  # Scottish Gaelic
    ("gl", "glg", "glg", "glg"),  # Galician
    ("he", "heb", "heb", "heb"),  # Hebrew
    ("hi", "hin", "hin", "hin"),  # Hindi
    ("hr", "hrv", "hrv", "hrv"),  # Croatian
    ("hu", "hun", "hun", "hun"),  # Hungarian
    ("hy", "arm", "hye", "hye"),  # Armenian
    ("id", "ind", "ind", "ind"),  # Indonesian
    ("is", "ice", "isl", "isl"),  # Icelandic
    ("it", "ita", "ita", "ita"),  # Italian
    ("ja", "jpn", "jpn", "jpn"),  # Japanese
    ("ka", "geo", "kat", "kat"),  # Georgian
    ("ko", "kor", "kor", "kor"),  # Korean
    ("ku", "kur", "kur", "kur"),  # Kurdish
    ("la", "lat", "lat", "lat"),  # Latin
    ("lb", "ltz", "ltz", "ltz"),  # Luxembourgish
    ("lt", "lit", "lit", "lit"),  # Lithuanian
    ("lv", "lav", "lav", "lav"),  # Latvian
    ("mk", "mac", "mkd", "mkd"),  # Macedonian
    ("mn", "mon", "mon", "mon"),  # Mongolian
    ("ms", "may", "msa", "msa"),  # Malay
    ("mt", "mlt", "mlt", "mlt"),  # Maltese
    ("my", "bur", "mya", "mya"),  # Burmese
    ("nb", "nob", "nob", "nob"),  # Norwegian Bokmål
    ("ne", "nep", "nep", "nep"),  # Nepali
    ("nl", "dut", "nld", "nld"),  # Dutch
    ("nn", "nno", "nno", "nno"),  # Norwegian Nynorsk
    ("no", "nor", "nor", "nor"),  # Norwegian
    ("oc", "oci", "oci", "oci"),  # Occitan
    ("pl", "pol", "pol", "pol"),  # Polish
    ("pt", "por", "por", "por"),  # Portuguese
    ("qu", "que", "que", "que"),  # Quechua
    ("ro", "rum", "ron", "ron"),  # Romanian
    ("ru", "rus", "rus", "rus"),  # Russian
    ("sk", "slo", "slk", "slk"),  # Slovak
    ("sl", "slv", "slv", "slv"),  # Slovenian
    ("sq", "alb", "sqi", "sqi"),  # Albanian
    ("sr", "srp", "srp", "srp"),  # Serbian
    ("sv", "swe", "swe", "swe"),  # Swedish
    ("sw", "swa", "swa", "swa"),  # Swahili
    ("ta", "tam", "tam", "tam"),  # Tamil
    ("th", "tha", "tha", "tha"),  # Thai
    ("tr", "tur", "tur", "tur"),  # Turkish
    ("uk", "ukr", "ukr", "ukr"),  # Ukrainian
    ("ur", "urd", "urd", "urd"),  # Urdu
    ("uz", "uzb", "uzb", "uzb"),  # Uzbek
    ("vi", "vie", "vie", "vie"),  # Vietnamese
    ("yi", "yid", "yid", "yid"),  # Yiddish
    ("zh", "chi", "zho", "zho"),  # Chinese
    ("", "", "", "grc"),  # Ancient Greek
    ("", "", "", "cmn"),  # Mandarin Chinese
    ("", "", "", "yue"),  # Cantonese
    ("", "", "", "arb"),  # Standard Arabic
    ("", "", "", "pes"),  # Iranian Persian
    ("", "", "", "prs"),  # Dari
    ("", "", "", "zsm"),  # Standard Malay
    ("", "", "", "swh"),  # Coastal Swahili
    ("", "", "", "ekk"),  # Standard Estonian
    ("", "", "", "lvs"),  # Standard Latvian
    ("", "", "", "als"),  # Tosk Albanian
    ("", "", "", "uzn"),  # Northern Uzbek
    ("", "", "", "azj"),  # North Azerbaijani
    ("", "", "", "khk"),  # Halh Mongolian
    ("", "", "", "npi"),  # Nepali (individual language)
    ("", "", "", "kmr"),  # Northern Kurdish
    ("", "", "", "ckb"),  # Central Kurdish
    ("", "", "", "ydd"),  # Eastern Yiddish
    ("", "", "", "quz"),  # Cusco Quechua
)

# ISO 639-3 macrolanguage -> individual languages
_MACROLANGUAGES: Final[dict[str, tuple[str, ...]]] = {
    "ara": ("arb",),
    "aze": ("azj",),
    "est": ("ekk",),
    "fas": ("pes", "prs"),
    "kur": ("ckb", "kmr"),
    "lav": ("lvs",),
    "mon": ("khk",),
    "msa": ("zsm",),
    "nep": ("npi",),
    "nor": ("nno", "nob"),
    "que": ("quz",),
    "sqi": ("als",),
    "swa": ("swh",),
    "uzb": ("uzn",),
    "yid": ("ydd",),
    "zho": ("cmn", "yue"),
}


def _build_index() -> MappingProxyType[str, frozenset[str]]:
    """Build the read-only code -> equivalent codes index."""
    by_iso3: dict[str, frozenset[str]] = {}
    for row in _LANGUAGES:
        by_iso3[row[3]] = frozenset(code for code in row if code)

    related: dict[str, set[str]] = {iso3: set(codes) for iso3, codes in by_iso3.items()}
    for macro, members in _MACROLANGUAGES.items():
        for member in members:
            related[macro] |= by_iso3[member]
            related[member] |= by_iso3[macro]

    index: dict[str, frozenset[str]] = {}
    for iso3, codes in by_iso3.items():
        for code in codes:
            index[code] = frozenset(related[iso3])
    return MappingProxyType(index)


_INDEX: Final[MappingProxyType[str, frozenset[str]]] = _build_index()


def normalize_locale(locale: str) -> str:
    """Convert a BCP-47 tag to the underscore form and lower-case the language.

    Examples:
        ```python
        normalize_locale("pt-BR")  # 'pt_BR'
        normalize_locale("FR")     # 'fr'
        ```
    """
    locale = locale.strip().replace("-", "_")
    language, sep, region = locale.partition("_")
    return f"{language.lower()}{sep}{region}"


def language_subtag(locale: str) -> str:
    """Return the lower-cased language part of *locale* (``"en_GB"`` → ``"en"``)."""
    return normalize_locale(locale).partition("_")[0]


def expand(locale: str) -> frozenset[str]:
    """Return every code accepted alongside *locale*, *locale* included.

    Unknown locales expand to the singleton ``{locale}``.
    """
    return frozenset(expand_ordered(locale))


def expand_ordered(locale: str) -> tuple[str, ...]:
    """Return the expansion of *locale* in a stable order.

    The input comes first, then its normalized form and bare language subtag
    when they differ, then the related table codes in alphabetical order.
    """
    ordered: dict[str, None] = {locale: None}
    if not locale.strip():
        return tuple(ordered)

    normalized = normalize_locale(locale)
    language = normalized.partition("_")[0]
    ordered.setdefault(normalized, None)
    ordered.setdefault(language, None)
    for code in sorted(_INDEX.get(language, ())):
        ordered.setdefault(code, None)
    return tuple(ordered)


def is_known(code: str) -> bool:
    """Whether *code* (or its language subtag) appears in the ISO table."""
    return language_subtag(code) in _INDEX
