"""Language tag normalization and matching.

Tags are BCP-47-like: a primary language subtag optionally followed by
subtags separated by "-" (e.g. "en", "en-US", "zh-Hant-TW"). The primary
subtag may be given as ISO 639-1 ("de"), ISO 639-2/B ("ger") or ISO 639-2/T
("deu"); all three normalize to the 2-letter form so that they compare equal.
Matching is case-insensitive.
"""

from __future__ import annotations

from enum import IntEnum

# ISO 639-1 (2-letter) to ISO 639-2/B (3-letter bibliographic) mapping
_ISO_639_1_TO_639_2B: dict[str, str] = {
    "aa": "aar",  # Afar
    "ab": "abk",  # Abkhazian
    "af": "afr",  # Afrikaans
    "am": "amh",  # Amharic
    "ar": "ara",  # Arabic
    "as": "asm",  # Assamese
    "ay": "aym",  # Aymara
    "az": "aze",  # Azerbaijani
    "ba": "bak",  # Bashkir
    "be": "bel",  # Belarusian
    "bg": "bul",  # Bulgarian
    "bh": "bih",  # Bihari
    "bi": "bis",  # Bislama
    "bn": "ben",  # Bengali
    "bo": "tib",  # Tibetan (bibliographic)
    "br": "bre",  # Breton
    "ca": "cat",  # Catalan
    "co": "cos",  # Corsican
    "cs": "cze",  # Czech (bibliographic)
    "cy": "wel",  # Welsh (bibliographic)
    "da": "dan",  # Danish
    "de": "ger",  # German (bibliographic)
    "dz": "dzo",  # Dzongkha
    "el": "gre",  # Greek (bibliographic)
    "en": "eng",  # English
    "eo": "epo",  # Esperanto
    "es": "spa",  # Spanish
    "et": "est",  # Estonian
    "eu": "baq",  # Basque (bibliographic)
    "fa": "per",  # Persian (bibliographic)
    "fi": "fin",  # Finnish
    "fj": "fij",  # Fijian
    "fo": "fao",  # Faroese
    "fr": "fre",  # French (bibliographic)
    "fy": "fry",  # Western Frisian
    "ga": "gle",  # Irish
    "gd": "gla",  # Scottish Gaelic
    "gl": "glg",  # Galician
    "gn": "grn",  # Guarani
    "gu": "guj",  # Gujarati
    "ha": "hau",  # Hausa
    "he": "heb",  # Hebrew
    "hi": "hin",  # Hindi
    "hr": "hrv",  # Croatian
    "hu": "hun",  # Hungarian
    "hy": "arm",  # Armenian (bibliographic)
    "ia": "ina",  # Interlingua
    "id": "ind",  # Indonesian
    "ie": "ile",  # Interlingue
    "ik": "ipk",  # Inupiaq
    "is": "ice",  # Icelandic (bibliographic)
    "it": "ita",  # Italian
    "iu": "iku",  # Inuktitut
    "ja": "jpn",  # Japanese
    "jv": "jav",  # Javanese
    "ka": "geo",  # Georgian (bibliographic)
    "kk": "kaz",  # Kazakh
    "kl": "kal",  # Kalaallisut
    "km": "khm",  # Khmer
    "kn": "kan",  # Kannada
    "ko": "kor",  # Korean
    "ks": "kas",  # Kashmiri
    "ku": "kur",  # Kurdish
    "ky": "kir",  # Kyrgyz
    "la": "lat",  # Latin
    "ln": "lin",  # Lingala
    "lo": "lao",  # Lao
    "lt": "lit",  # Lithuanian
    "lv": "lav",  # Latvian
    "mg": "mlg",  # Malagasy
    "mi": "mao",  # Maori (bibliographic)
    "mk": "mac",  # Macedonian (bibliographic)
    "ml": "mal",  # Malayalam
    "mn": "mon",  # Mongolian
    "mr": "mar",  # Marathi
    "ms": "may",  # Malay (bibliographic)
    "mt": "mlt",  # Maltese
    "my": "bur",  # Burmese (bibliographic)
    "na": "nau",  # Nauru
    "ne": "nep",  # Nepali
    "nl": "dut",  # Dutch (bibliographic)
    "no": "nor",  # Norwegian
    "oc": "oci",  # Occitan
    "om": "orm",  # Oromo
    "or": "ori",  # Oriya
    "pa": "pan",  # Punjabi
    "pl": "pol",  # Polish
    "ps": "pus",  # Pashto
    "pt": "por",  # Portuguese
    "qu": "que",  # Quechua
    "rm": "roh",  # Romansh
    "rn": "run",  # Rundi
    "ro": "rum",  # Romanian (bibliographic)
    "ru": "rus",  # Russian
    "rw": "kin",  # Kinyarwanda
    "sa": "san",  # Sanskrit
    "sd": "snd",  # Sindhi
    "se": "sme",  # Northern Sami
    "sg": "sag",  # Sango
    "si": "sin",  # Sinhala
    "sk": "slo",  # Slovak (bibliographic)
    "sl": "slv",  # Slovenian
    "sm": "smo",  # Samoan
    "sn": "sna",  # Shona
    "so": "som",  # Somali
    "sq": "alb",  # Albanian (bibliographic)
    "sr": "srp",  # Serbian
    "ss": "ssw",  # Swati
    "st": "sot",  # Southern Sotho
    "su": "sun",  # Sundanese
    "sv": "swe",  # Swedish
    "sw": "swa",  # Swahili
    "ta": "tam",  # Tamil
    "te": "tel",  # Telugu
    "tg": "tgk",  # Tajik
    "th": "tha",  # Thai
    "ti": "tir",  # Tigrinya
    "tk": "tuk",  # Turkmen
    "tl": "tgl",  # Tagalog
    "tn": "tsn",  # Tswana
    "to": "ton",  # Tonga
    "tr": "tur",  # Turkish
    "ts": "tso",  # Tsonga
    "tt": "tat",  # Tatar
    "tw": "twi",  # Twi
    "ug": "uig",  # Uyghur
    "uk": "ukr",  # Ukrainian
    "ur": "urd",  # Urdu
    "uz": "uzb",  # Uzbek
    "vi": "vie",  # Vietnamese
    "vo": "vol",  # Volapük
    "wo": "wol",  # Wolof
    "xh": "xho",  # Xhosa
    "yi": "yid",  # Yiddish
    "yo": "yor",  # Yoruba
    "za": "zha",  # Zhuang
    "zh": "chi",  # Chinese (bibliographic)
    "zu": "zul",  # Zulu
}

# ISO 639-2/T (terminological) to ISO 639-2/B (bibliographic) mapping
# These are the languages where the codes differ
_ISO_639_2T_TO_639_2B: dict[str, str] = {
    "bod": "tib",  # Tibetan
    "ces": "cze",  # Czech
    "cym": "wel",  # Welsh
    "deu": "ger",  # German
    "ell": "gre",  # Greek
    "eus": "baq",  # Basque
    "fas": "per",  # Persian
    "fra": "fre",  # French
    "hye": "arm",  # Armenian
    "isl": "ice",  # Icelandic
    "kat": "geo",  # Georgian
    "mkd": "mac",  # Macedonian
    "mri": "mao",  # Maori
    "msa": "may",  # Malay
    "mya": "bur",  # Burmese
    "nld": "dut",  # Dutch
    "ron": "rum",  # Romanian
    "slk": "slo",  # Slovak
    "sqi": "alb",  # Albanian
    "zho": "chi",  # Chinese
}

# 3-letter codes (both B and T forms) to their 2-letter equivalents
_ISO_639_2_TO_639_1: dict[str, str] = {v: k for k, v in _ISO_639_1_TO_639_2B.items()}
_ISO_639_2_TO_639_1.update(
    {t: _ISO_639_2_TO_639_1[b] for t, b in _ISO_639_2T_TO_639_2B.items()}
)


class MatchType(IntEnum):
    """How closely a candidate language matches a preferred language.

    Higher values are better matches, so tiers can be compared with max().
    """

    NONE = 0
    # Same primary subtag, different (or missing) regional subtags:
    # "en-GB" for a preference of "en-US".
    OTHER_SUB_LANGUAGE_OKAY = 1
    # Candidate is the preference's primary subtag: "en" for "en-US".
    BASE_LANGUAGE_OKAY = 2
    EXACT = 3


def normalize_language(tag: str | None) -> str:
    """Normalize a language tag for comparison.

    The tag is lowercased, "_" separators become "-", and a 3-letter primary
    subtag with a 2-letter equivalent is shortened. Unknown subtags are kept.

    Args:
        tag: Language tag to normalize. None or blank returns "".

    Returns:
        Normalized tag, or "" when no language is given.

    Examples:
        >>> normalize_language("en-US")
        'en-us'
        >>> normalize_language("deu")
        'de'
        >>> normalize_language("ger_AT")
        'de-at'
    """
    if not tag:
        return ""

    tag = tag.strip().lower().replace("_", "-")

    base, sep, rest = tag.partition("-")
    base = _ISO_639_2_TO_639_1.get(base, base)
    return f"{base}{sep}{rest}"


def get_base_language(tag: str | None) -> str:
    """Return the normalized primary subtag of a language tag."""
    return normalize_language(tag).partition("-")[0]


def match_type(preferred: str | None, candidate: str | None) -> MatchType:
    """Classify how well a candidate language satisfies a preference.

    An empty preference or an empty candidate language never matches.

    Args:
        preferred: The caller's preferred language tag.
        candidate: The candidate's language tag.

    Returns:
        The best MatchType the pair achieves.

    Examples:
        >>> match_type("en", "EN")
        <MatchType.EXACT: 3>
        >>> match_type("en-US", "en")
        <MatchType.BASE_LANGUAGE_OKAY: 2>
        >>> match_type("en-US", "en-GB")
        <MatchType.OTHER_SUB_LANGUAGE_OKAY: 1>
    """
    pref = normalize_language(preferred)
    cand = normalize_language(candidate)
    if not pref or not cand:
        return MatchType.NONE

    if pref == cand:
        return MatchType.EXACT

    pref_base = get_base_language(pref)
    if cand == pref_base:
        return MatchType.BASE_LANGUAGE_OKAY
    if get_base_language(cand) == pref_base:
        return MatchType.OTHER_SUB_LANGUAGE_OKAY
    return MatchType.NONE


def languages_match(code1: str | None, code2: str | None) -> bool:
    """Check if two language tags are the same after normalization.

    This comparison is standard-agnostic: "de", "ger", and "deu" all match.

    Examples:
        >>> languages_match("de", "ger")
        True
        >>> languages_match("en-us", "en-US")
        True
        >>> languages_match("en", "en-US")
        False
    """
    return normalize_language(code1) == normalize_language(code2)
