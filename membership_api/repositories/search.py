"""
Membership API - Search Filter Builder
======================================

What:  Builds the WHERE clause behind `?search=` on the list endpoints.
How:   For each field ordering, the display fields are coalesced to '' and
       joined with single spaces; the clause matches when any joined string
       contains the term, case-insensitively.

Example (members, orderings [(name, surname), (surname, name)]):
    search="doe jo" matches {name: "John", surname: "Doe"} through
    "Doe John", and search="john d" matches it through "John Doe".

The term is matched literally. `icontains(..., autoescape=True)` escapes the
LIKE wildcards % and _ (and the escape character itself), so
search="%" only matches names that contain a percent sign.
"""

from typing import Optional, Sequence

from sqlalchemy import ColumnElement, func, literal, or_

FieldOrdering = Sequence[ColumnElement]


def normalize_term(term: Optional[str]) -> Optional[str]:
    """Returns None for an absent or empty search term, the term otherwise."""
    if term is None or term == "":
        return None
    return term


def concat_fields(fields: FieldOrdering) -> ColumnElement:
    """SQL expression: fields coalesced to '' and joined with ' '."""
    parts = [func.coalesce(field, literal("")) for field in fields]
    expr = parts[0]
    for part in parts[1:]:
        expr = expr + literal(" ") + part
    return expr


def build_search_filter(
    term: Optional[str],
    orderings: Sequence[FieldOrdering],
) -> Optional[ColumnElement[bool]]:
    """
    Build the case-insensitive substring filter for a search term.

    Args:
        term: Raw `search` query parameter.
        orderings: Field orderings to try, e.g.
            [(Member.name, Member.surname), (Member.surname, Member.name)].

    Returns:
        A boolean clause for select().where(), or None when the term is
        absent/empty (no filtering).
    """
    term = normalize_term(term)
    if term is None:
        return None
    if not orderings:
        raise ValueError("At least one field ordering is required")

    return or_(
        *(concat_fields(fields).icontains(term, autoescape=True) for fields in orderings)
    )
