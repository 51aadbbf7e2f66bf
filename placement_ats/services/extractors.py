"""
Field Extractors - pattern/heuristic extraction of structured fields.

PURPOSE:
Pure functions that map raw resume / JD text to optional values:
skills, email, phone, name, CGPA, branch, academic year, backlog limit,
minimum CGPA and package.

RULES:
- Every extractor is total: non-matching text returns None (or an empty
  collection), never raises.
- Each regex family lives in a module-level constant and is applied by one
  named function so it can be tuned and tested on its own.
- Callers read None as "unconstrained" on job requirements and "unknown"
  on candidate fields.
"""

import re
from functools import lru_cache
from typing import List, Optional, Pattern, Sequence, Set

from placement_ats.core.logging_config import get_logger
from placement_ats.core.vocabulary import BranchKeywordTable, SkillVocabulary
from placement_ats.schemas.schemas import BranchCode, CandidateName

logger = get_logger(__name__)


# ============================================================
# PATTERN FAMILIES
# ============================================================

EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')

# Strictest first; the first pattern with any match wins
PHONE_PATTERNS = (
    re.compile(r'(?:\+91[\s-]?)?[6-9]\d{9}'),
    re.compile(r'[6-9]\d{9}'),
    re.compile(r'\d{10}'),
)

NAME_SCAN_LINES = 5
NAME_MAX_LENGTH = 50
NAME_SKIP_PATTERN = re.compile(
    r'@|\d{10}|github|linkedin|portfolio|objective|summary|education|experience|'
    r'skills|projects|curriculum vitae|resume',
    re.IGNORECASE
)
NAME_WORD_PATTERN = re.compile(r'^[A-Za-z]+$')

CGPA_PATTERNS = (
    re.compile(r'cgpa[\s:]*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'gpa[\s:]*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'grade[\s:]*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'(\d+\.?\d*)\s*/\s*10(?!\d)', re.IGNORECASE),
    re.compile(r'(\d+\.?\d*)\s*cgpa', re.IGNORECASE),
    # weak anchors: a decimal somewhere after the degree line
    re.compile(r'bachelor.*?(\d+\.\d+)', re.IGNORECASE),
    re.compile(r'b\.?\s*tech.*?(\d+\.\d+)', re.IGNORECASE),
    re.compile(r'computer science.*?(\d+\.\d+)', re.IGNORECASE),
)

PERCENTAGE_PATTERNS = (
    re.compile(r'percentage[\s:]*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'(\d+\.?\d*)\s*%'),
    re.compile(r'%[\s:]*(\d+\.?\d*)'),
)

MIN_CGPA_PATTERNS = (
    re.compile(r'(?:minimum|min|required)\s+(?:cgpa|gpa)[\s:]*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'cgpa[\s:]*(?:of|>=|>|above)\s*(\d+\.?\d*)', re.IGNORECASE),
    re.compile(r'(\d+\.?\d*)\s*(?:cgpa|gpa)\s+(?:and above|or above|minimum|required)', re.IGNORECASE),
)

NO_BACKLOG_PATTERNS = (
    re.compile(r'\b(?:no|zero|0)\s+(?:active\s+)?backlogs?', re.IGNORECASE),
    re.compile(r'backlogs?[\s:]*(?:no|zero|0|not allowed|nil)\b', re.IGNORECASE),
)

BACKLOG_LIMIT_PATTERNS = (
    re.compile(r'(?:maximum|max|up to)\s+(\d+)\s+backlogs?', re.IGNORECASE),
    re.compile(r'(\d+)\s+backlogs?\s+(?:allowed|acceptable|maximum|max)', re.IGNORECASE),
)

YEAR_RANGE_PATTERN = re.compile(r'(20\d{2})\s*[-–—]\s*(20\d{2}|present|pursuing|passout)', re.IGNORECASE)
YEAR_CONTEXT_WINDOW = 200
YEAR_CONTEXT_MARKERS = ('bachelor', 'b.tech', 'b tech', 'computer science', 'engineering')
OPEN_ENDED_MARKERS = ('present', 'pursuing', 'passout')
# a range ending this late is an ongoing degree, so its start is the admission year
ONGOING_END_YEAR = 2024

ADMISSION_YEAR_PATTERNS = (
    re.compile(r'(?:admitted|admission|joined|enrolled).*?(20\d{2})', re.IGNORECASE),
    re.compile(r'batch\s*(?:of)?\s*(20\d{2})', re.IGNORECASE),
)
ADMISSION_YEAR_MIN = 2015
ADMISSION_YEAR_MAX = 2025

PACKAGE_PATTERNS = (
    re.compile(
        r'(?:package|ctc|salary|compensation)[\s:]*(?:inr|rs\.?|₹)?\s*(\d+(?:\.\d+)?)\s*(?:lpa|lakhs?|l)\b',
        re.IGNORECASE
    ),
    re.compile(
        r'(?:inr|rs\.?|₹)?\s*(\d+(?:\.\d+)?)\s*(?:lpa|lakhs?)\s*(?:per annum|ctc|package)',
        re.IGNORECASE
    ),
)


# ============================================================
# HELPERS
# ============================================================

def _first_value_in_range(
    patterns: Sequence[Pattern],
    text: str,
    low: float,
    high: float,
    low_inclusive: bool = True
) -> Optional[float]:
    """Scan patterns in priority order; return the first captured number in range."""
    for pattern in patterns:
        for match in pattern.finditer(text):
            try:
                value = float(match.group(1))
            except ValueError:
                continue
            above_low = value >= low if low_inclusive else value > low
            if above_low and value <= high:
                return value
    return None


@lru_cache(maxsize=1024)
def _skill_pattern(token: str) -> Pattern:
    # lookarounds instead of \b so tokens ending in symbols (c++, c#, node.js) still match
    return re.compile(r'(?<!\w)' + re.escape(token) + r'(?!\w)', re.IGNORECASE)


def _split_name(words: List[str]) -> CandidateName:
    return CandidateName(
        f_name=words[0] if words else '',
        m_name=' '.join(words[1:-1]) if len(words) > 2 else '',
        l_name=words[-1] if len(words) > 1 else ''
    )


# ============================================================
# SKILLS
# ============================================================

def extract_skills(text: str, vocabulary: SkillVocabulary) -> Set[str]:
    """Return the vocabulary tokens that occur in text as whole words."""
    lower_text = text.lower()
    found = {token for token in vocabulary.skills if _skill_pattern(token).search(lower_text)}
    logger.debug(f"Found {len(found)} skills")
    return found


def match_skill(candidate_skill: str, required_skill: str) -> bool:
    """
    Substring-symmetric skill comparison after lowercase + trim.

    "react" matches "reactjs" and vice versa; near-variants over-match on purpose.
    """
    a = candidate_skill.strip().lower()
    b = required_skill.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


# ============================================================
# CONTACT
# ============================================================

def extract_email(text: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(text)
    if match:
        logger.debug(f"Found email: {match.group(0)}")
        return match.group(0)
    logger.debug("No email found")
    return None


def extract_phone(text: str) -> Optional[str]:
    for pattern in PHONE_PATTERNS:
        match = pattern.search(text)
        if match:
            logger.debug(f"Found phone: {match.group(0)}")
            return match.group(0)
    logger.debug("No phone found")
    return None


def extract_name(text: str) -> CandidateName:
    """
    Guess the candidate name from the top of the resume.

    Scans the first five non-blank lines, skipping contact / section-heading
    lines, and takes the first line of 2-4 alphabetic words under 50 chars.

    Known-weak fallback: when no line qualifies, the first line is split
    unconditionally, which can yield a header as a "name". Callers rely on
    always getting a name tuple back, so this is kept as is.
    """
    lines = [line.strip() for line in text.split('\n') if line.strip() and len(line.strip()) > 2]

    for line in lines[:NAME_SCAN_LINES]:
        if NAME_SKIP_PATTERN.search(line):
            continue

        words = [w for w in line.split() if NAME_WORD_PATTERN.match(w) and len(w) > 1]
        if 2 <= len(words) <= 4 and len(line) < NAME_MAX_LENGTH:
            logger.debug(f"Found name: {line}")
            return _split_name(words)

    logger.debug("Name detection unclear, using first line")
    first_line = lines[0] if lines else ''
    return _split_name([w for w in first_line.split() if len(w) > 1])


# ============================================================
# ACADEMICS
# ============================================================

def extract_cgpa(text: str) -> Optional[float]:
    """
    CGPA on a 0-10 scale.

    Anchored patterns are tried first; failing those a percentage in
    (10, 100] is rescaled to value / 10.
    """
    cgpa = _first_value_in_range(CGPA_PATTERNS, text, 0.0, 10.0)
    if cgpa is not None:
        logger.debug(f"Found CGPA: {cgpa}")
        return cgpa

    percentage = _first_value_in_range(PERCENTAGE_PATTERNS, text, 10.0, 100.0, low_inclusive=False)
    if percentage is not None:
        cgpa = round(percentage / 10, 2)
        logger.debug(f"Found CGPA from percentage: {cgpa} ({percentage}%)")
        return cgpa

    logger.debug("No CGPA found")
    return None


def extract_min_cgpa(text: str) -> Optional[float]:
    """Minimum CGPA demanded by a job description."""
    value = _first_value_in_range(MIN_CGPA_PATTERNS, text, 0.0, 10.0)
    if value is None:
        logger.debug("No minimum CGPA found")
    return value


def extract_branch(text: str, table: BranchKeywordTable) -> Optional[BranchCode]:
    """
    First branch, in table order, with any keyword present in text.

    Keywords match as plain substrings, so short ones over-match
    ("electronics" contains "cs" and resolves to CSE under the default order).
    """
    lower_text = text.lower()
    for branch, keywords in table.entries:
        for keyword in keywords:
            if keyword in lower_text:
                logger.debug(f"Found branch: {branch.value} (matched: {keyword})")
                return branch
    logger.debug("No branch found")
    return None


def extract_branches(text: str, table: BranchKeywordTable) -> Optional[List[BranchCode]]:
    """Every branch mentioned in a JD; None means open to all branches."""
    lower_text = text.lower()
    branches = [
        branch for branch, keywords in table.entries
        if any(keyword in lower_text for keyword in keywords)
    ]
    if not branches:
        logger.debug("No branch restrictions found (open to all)")
        return None
    return branches


def extract_max_backlogs(text: str) -> Optional[int]:
    for pattern in NO_BACKLOG_PATTERNS:
        if pattern.search(text):
            logger.debug("Found: no backlogs allowed (0)")
            return 0

    for pattern in BACKLOG_LIMIT_PATTERNS:
        for match in pattern.finditer(text):
            value = int(match.group(1))
            if 0 <= value <= 10:
                logger.debug(f"Found max backlogs: {value}")
                return value

    logger.debug("No backlog requirement found (allowing all)")
    return None


def extract_academic_year(text: str) -> Optional[int]:
    """Admission year of the current degree."""
    for match in YEAR_RANGE_PATTERN.finditer(text):
        start = match.start()
        context = (
            text[max(0, start - YEAR_CONTEXT_WINDOW):start]
            + text[start:start + YEAR_CONTEXT_WINDOW]
        ).lower()
        if not any(marker in context for marker in YEAR_CONTEXT_MARKERS):
            continue

        end_token = match.group(2).lower()
        if end_token in OPEN_ENDED_MARKERS or (end_token.isdigit() and int(end_token) >= ONGOING_END_YEAR):
            year = int(match.group(1))
            logger.debug(f"Found academic year: {year} (range: {match.group(0)})")
            return year

    for pattern in ADMISSION_YEAR_PATTERNS:
        for match in pattern.finditer(text):
            year = int(match.group(1))
            if ADMISSION_YEAR_MIN <= year <= ADMISSION_YEAR_MAX:
                logger.debug(f"Found academic year: {year}")
                return year

    logger.debug("No academic year found")
    return None


# ============================================================
# COMPENSATION
# ============================================================

def extract_package(text: str) -> Optional[float]:
    """Annual package in LPA, accepted in [1, 100]."""
    value = _first_value_in_range(PACKAGE_PATTERNS, text, 1.0, 100.0)
    if value is None:
        logger.debug("No package information found")
    return value
