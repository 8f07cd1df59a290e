"""Avatar placeholder helpers."""

import re
from typing import Iterable, List

PLACEHOLDER_PATTERN = re.compile(r"^[A-Z]{1,4}$")
MAX_PLACEHOLDER_LENGTH = 4


def derive_placeholder(name: str) -> str:
    """Build avatar initials from a member name.

    Takes the first character of each whitespace separated word, upper-cased,
    and keeps at most four of them: "Mario Rossi" -> "MR".
    """
    initials = "".join(part[0].upper() for part in name.split())
    return initials[:MAX_PLACEHOLDER_LENGTH]


def is_valid_placeholder(value: str) -> bool:
    return bool(PLACEHOLDER_PATTERN.match(value))


def clean_skills(skills: Iterable[str]) -> List[str]:
    """Strip skills and drop the empty ones, keeping order and duplicates."""
    return [skill.strip() for skill in skills if skill and skill.strip()]
