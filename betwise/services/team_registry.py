"""
Team names offered by the match form, and resolution of typed names to them.

The form offers a fixed list of franchises but also accepts free text
("custom" teams).  Typed names are resolved against the list first so that
"csk", "Chennai" or "Royal Challengers Bangalore" land on the canonical
entry; anything that does not resolve confidently is kept as a custom name.
"""

from __future__ import annotations

import logging

from rapidfuzz import fuzz, process, utils

logger = logging.getLogger(__name__)

IPL_TEAMS: list[str] = [
    "Chennai Super Kings",
    "Delhi Capitals",
    "Gujarat Titans",
    "Kolkata Knight Riders",
    "Lucknow Super Giants",
    "Mumbai Indians",
    "Punjab Kings",
    "Rajasthan Royals",
    "Royal Challengers Bengaluru",
    "Sunrisers Hyderabad",
]

# Short forms and former names.  Keys are lower-case.
TEAM_ABBREVIATIONS: dict[str, str] = {
    "csk": "Chennai Super Kings",
    "dc":  "Delhi Capitals",
    "gt":  "Gujarat Titans",
    "kkr": "Kolkata Knight Riders",
    "lsg": "Lucknow Super Giants",
    "mi":  "Mumbai Indians",
    "pbks": "Punjab Kings",
    "rr":  "Rajasthan Royals",
    "rcb": "Royal Challengers Bengaluru",
    "srh": "Sunrisers Hyderabad",
    "delhi daredevils":            "Delhi Capitals",
    "kings xi punjab":             "Punjab Kings",
    "royal challengers bangalore": "Royal Challengers Bengaluru",
}

# token_set_ratio cutoff.  High enough that "Kings" alone does not pick one
# of the three "Kings" franchises.
FUZZY_SCORE_CUTOFF = 85


def _is_ambiguous(query: str, choices: list[str]) -> bool:
    """True if more than one choice scores a perfect token-set match."""
    perfect = [
        c for c in choices
        if fuzz.token_set_ratio(query, c, processor=utils.default_process) == 100
    ]
    return len(perfect) > 1


def resolve_team_name(name: str, choices: list[str] | None = None) -> str | None:
    """
    Map a typed team name to an entry in ``choices`` (default :data:`IPL_TEAMS`).

    Strategies, in order:
      1. abbreviation / former-name lookup
      2. case-insensitive exact match
      3. rapidfuzz ``token_set_ratio`` at :data:`FUZZY_SCORE_CUTOFF`,
         rejected when the query matches several choices equally well

    Returns:
        The matching entry, or None if no confident match is found.
    """
    valid_choices = IPL_TEAMS if choices is None else choices
    name = name.strip()

    if not name or not valid_choices:
        return None

    abbreviated = TEAM_ABBREVIATIONS.get(name.lower())
    if abbreviated and abbreviated in valid_choices:
        return abbreviated

    for choice in valid_choices:
        if choice.lower() == name.lower():
            return choice

    result = process.extractOne(
        name, valid_choices, scorer=fuzz.token_set_ratio,
        processor=utils.default_process,
        score_cutoff=FUZZY_SCORE_CUTOFF,
    )
    if result and _is_ambiguous(name, valid_choices):
        logger.warning("Ambiguous team name '%s' matches several teams", name)
        result = None

    if result:
        # result is a tuple: (matched_string, score, index)
        logger.debug("Fuzzy matched '%s' to '%s' with score %.1f", name, result[0], result[1])
        return result[0]

    return None
