# -*- coding: utf-8 -*-
"""
Language Table
==============

Immutable code -> name table used to validate language arguments.

Tables are never mutated in place: ``updated()`` returns a new snapshot, so a
refresh from the documentation page can run while other tasks keep reading
the old table.
"""

from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from bs4 import BeautifulSoup

from gtranslate.core.exceptions import InvalidLanguageError, ResponseParseError

DEFAULT_LANGUAGE = "auto"

_DEFAULT_LANGUAGES: Dict[str, str] = {
    'af': 'afrikaans',
    'sq': 'albanian',
    'am': 'amharic',
    'ar': 'arabic',
    'hy': 'armenian',
    'az': 'azerbaijani',
    'eu': 'basque',
    'be': 'belarusian',
    'bn': 'bengali',
    'bs': 'bosnian',
    'bg': 'bulgarian',
    'ca': 'catalan',
    'ceb': 'cebuano',
    'ny': 'chichewa',
    'zh-cn': 'chinese (simplified)',
    'zh-tw': 'chinese (traditional)',
    'co': 'corsican',
    'hr': 'croatian',
    'cs': 'czech',
    'da': 'danish',
    'nl': 'dutch',
    'en': 'english',
    'eo': 'esperanto',
    'et': 'estonian',
    'tl': 'filipino',
    'fi': 'finnish',
    'fr': 'french',
    'fy': 'frisian',
    'gl': 'galician',
    'ka': 'georgian',
    'de': 'german',
    'el': 'greek',
    'gu': 'gujarati',
    'ht': 'haitian creole',
    'ha': 'hausa',
    'haw': 'hawaiian',
    'iw': 'hebrew',
    'he': 'hebrew',
    'hi': 'hindi',
    'hmn': 'hmong',
    'hu': 'hungarian',
    'is': 'icelandic',
    'ig': 'igbo',
    'id': 'indonesian',
    'ga': 'irish',
    'it': 'italian',
    'ja': 'japanese',
    'jw': 'javanese',
    'kn': 'kannada',
    'kk': 'kazakh',
    'km': 'khmer',
    'ko': 'korean',
    'ku': 'kurdish (kurmanji)',
    'ky': 'kyrgyz',
    'lo': 'lao',
    'la': 'latin',
    'lv': 'latvian',
    'lt': 'lithuanian',
    'lb': 'luxembourgish',
    'mk': 'macedonian',
    'mg': 'malagasy',
    'ms': 'malay',
    'ml': 'malayalam',
    'mt': 'maltese',
    'mi': 'maori',
    'mr': 'marathi',
    'mn': 'mongolian',
    'my': 'myanmar (burmese)',
    'ne': 'nepali',
    'no': 'norwegian',
    'or': 'odia',
    'ps': 'pashto',
    'fa': 'persian',
    'pl': 'polish',
    'pt': 'portuguese',
    'pa': 'punjabi',
    'ro': 'romanian',
    'ru': 'russian',
    'sm': 'samoan',
    'gd': 'scots gaelic',
    'sr': 'serbian',
    'st': 'sesotho',
    'sn': 'shona',
    'sd': 'sindhi',
    'si': 'sinhala',
    'sk': 'slovak',
    'sl': 'slovenian',
    'so': 'somali',
    'es': 'spanish',
    'su': 'sundanese',
    'sw': 'swahili',
    'sv': 'swedish',
    'tg': 'tajik',
    'ta': 'tamil',
    'te': 'telugu',
    'th': 'thai',
    'tr': 'turkish',
    'uk': 'ukrainian',
    'ur': 'urdu',
    'ug': 'uyghur',
    'uz': 'uzbek',
    'vi': 'vietnamese',
    'cy': 'welsh',
    'xh': 'xhosa',
    'yi': 'yiddish',
    'yo': 'yoruba',
    'zu': 'zulu',
}


class LanguageTable(Mapping):
    """Read-only mapping of lower-case language code -> lower-case name."""

    def __init__(self, languages: Optional[Mapping[str, str]] = None):
        data = {str(k).lower(): str(v).lower() for k, v in (languages or {}).items()}
        self._data = MappingProxyType(data)

    def __getitem__(self, code: str) -> str:
        return self._data[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"LanguageTable({len(self._data)} languages)"

    def as_mapping(self) -> Mapping[str, str]:
        return self._data

    def resolve(self, lang: str) -> str:
        """Accept a code ('es') or a full name ('spanish'); return the code."""
        lang = (lang or "").strip().lower()
        if lang == DEFAULT_LANGUAGE:
            return DEFAULT_LANGUAGE
        if lang in self._data:
            return lang
        for code, name in self._data.items():
            if name == lang:
                return code
        raise InvalidLanguageError(lang, DEFAULT_LANGUAGE)

    def updated(self, languages: Mapping[str, str]) -> "LanguageTable":
        """New table with ``languages`` merged over this one."""
        merged = dict(self._data)
        merged.update({str(k).lower(): str(v).lower() for k, v in languages.items()})
        return LanguageTable(merged)


def parse_languages_page(html: str) -> Dict[str, str]:
    """Extract ``{code: name}`` from the first table of the docs page.

    Each row holds the language name in its first ``<td>`` and the code in a
    ``<code>`` element. Rows missing either are skipped.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    table = soup.find("table")
    if not table:
        raise ResponseParseError("language table not found in documentation page")
    body = table.find("tbody") or table
    found: Dict[str, str] = {}
    for row in body.find_all("tr"):
        cell = row.find("td")
        code = row.find("code")
        if not cell or not code:
            continue
        name = cell.get_text(strip=True)
        key = code.get_text(strip=True)
        if not name or not key:
            continue
        found[key.lower()] = name.lower()
    return found


DEFAULT_LANGUAGES = LanguageTable(_DEFAULT_LANGUAGES)
