"""
Pattern recognisers for unified checks: dates and writing script.
"""

import re
import unicodedata
from collections import Counter
from datetime import date, timedelta
from typing import Iterator, Optional, Tuple

from ..base import Range

MONTHS = {
    'january': 1, 'february': 2, 'march': 3, 'april': 4, 'may': 5, 'june': 6,
    'july': 7, 'august': 8, 'september': 9, 'october': 10, 'november': 11,
    'december': 12,
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'jun': 6, 'jul': 7, 'aug': 8,
    'sep': 9, 'sept': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

RELATIVE_DAYS = {'yesterday': -1, 'today': 0, 'tomorrow': 1}

_MONTH_NAMES = '|'.join(sorted(MONTHS, key=len, reverse=True))

DATE_PATTERN = re.compile(
    r'\b(?:'
    r'(?P<iso>(?P<iy>\d{4})-(?P<im>\d{1,2})-(?P<id>\d{1,2}))'
    r'|(?P<num>(?P<n1>\d{1,2})[/.](?P<n2>\d{1,2})[/.](?P<ny>\d{4}))'
    r'|(?P<dmy>(?P<dd>\d{1,2})(?:st|nd|rd|th)?\s+(?P<dm>' + _MONTH_NAMES + r')\.?,?\s+(?P<dy>\d{4}))'
    r'|(?P<mdy>(?P<mm>' + _MONTH_NAMES + r')\.?\s+(?P<md>\d{1,2})(?:st|nd|rd|th)?,?\s+(?P<my>\d{4}))'
    r'|(?P<rel>yesterday|today|tomorrow)'
    r')\b',
    re.IGNORECASE
)

# Unicode name prefix -> ISO 15924 script code
SCRIPT_CODES = {
    'LATIN': 'Latn',
    'CYRILLIC': 'Cyrl',
    'GREEK': 'Grek',
    'ARABIC': 'Arab',
    'HEBREW': 'Hebr',
    'DEVANAGARI': 'Deva',
    'THAI': 'Thai',
    'HANGUL': 'Hang',
    'HIRAGANA': 'Hira',
    'KATAKANA': 'Kana',
    'CJK': 'Hani',
    'GEORGIAN': 'Geor',
    'ARMENIAN': 'Armn',
}


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _to_date(match: 're.Match', today: date) -> Optional[date]:
    g = match.group
    if g('iso'):
        return _safe_date(int(g('iy')), int(g('im')), int(g('id')))
    if g('num'):
        # Day first unless that is impossible (12/31/2024)
        first, second, year = int(g('n1')), int(g('n2')), int(g('ny'))
        return _safe_date(year, second, first) or _safe_date(year, first, second)
    if g('dmy'):
        return _safe_date(int(g('dy')), MONTHS[g('dm').lower()], int(g('dd')))
    if g('mdy'):
        return _safe_date(int(g('my')), MONTHS[g('mm').lower()], int(g('md')))
    return today + timedelta(days=RELATIVE_DAYS[g('rel').lower()])


def find_dates(text: str, today: Optional[date] = None) -> Iterator[Tuple[Range, date]]:
    """
    Yield (range, date) for every recognisable date expression in ``text``.

    Relative words (today, tomorrow, yesterday) resolve against ``today``.
    """
    today = today or date.today()
    for match in DATE_PATTERN.finditer(text):
        value = _to_date(match, today)
        if value is not None:
            yield Range(match.start(), match.end() - match.start()), value


def dominant_script(text: str) -> str:
    """ISO 15924 code of the most common script among letters, 'Zyyy' if none."""
    counts = Counter()
    for ch in text:
        if not ch.isalpha():
            continue
        name = unicodedata.name(ch, '')
        prefix = name.split(' ', 1)[0]
        counts[SCRIPT_CODES.get(prefix, 'Zzzz')] += 1
    if not counts:
        return 'Zyyy'
    return counts.most_common(1)[0][0]
