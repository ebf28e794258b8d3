"""
callnumber.py - Call number normalisation and matching

Contains:
    - CallNumberKey: (base, honors, section) view of a raw call number
    - parse_call_number: '161.02' -> CallNumberKey('161', False, '02')
    - same_course: equivalence used to resolve a reference to a course
    - call_numbers_match: same_course over raw strings

Catalog text under-specifies sections ('Math 1151' vs the catalogued
'1151.01'), so a missing section or the 'XX' placeholder matches any
section of the same base number.
"""
from dataclasses import dataclass
import re
from typing import Optional

WILDCARD_SECTION = "XX"

_BASE_RE = re.compile(r'^[0-9]{3,4}')
_SECTION_RE = re.compile(r'(?<=\.)[0-9X]+', re.IGNORECASE)


@dataclass(frozen=True)
class CallNumberKey:
    """Structured call number."""
    base: str                       # "5520"
    honors: bool                    # trailing H / E
    section: Optional[str] = None   # "02", "XX" or None

    @property
    def is_wildcard(self):
        return self.section is None or self.section == WILDCARD_SECTION


def parse_call_number(raw: str) -> Optional[CallNumberKey]:
    """Parses a raw call number. Returns None when it has no leading
    3-4 digit run; callers treat that as 'matches nothing'."""
    if not raw:
        return None

    base = _BASE_RE.match(raw)
    if not base:
        return None

    lowered = raw.lower()
    honors = 'h' in lowered or 'e' in lowered

    section = None
    if '.' in raw:
        match = _SECTION_RE.search(raw)
        if match:
            section = match.group().upper()

    return CallNumberKey(base=base.group(), honors=honors, section=section)


def same_course(a: Optional[CallNumberKey], b: Optional[CallNumberKey]) -> bool:
    """True if both keys denote the same catalog slot."""
    if a is None or b is None:
        return False
    if a.base != b.base or a.honors != b.honors:
        return False
    if a.is_wildcard or b.is_wildcard:
        return True
    return a.section == b.section


def call_numbers_match(raw_a: str, raw_b: str) -> bool:
    return same_course(parse_call_number(raw_a), parse_call_number(raw_b))
