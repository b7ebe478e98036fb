"""
List selectors used by the list screens: search and single-field filters
over an already-fetched collection. Order of the input is preserved.
"""

from typing import Any, Dict, List, Optional

from .domain import animal_status, owner_full_name

Record = Dict[str, Any]


def _contains(value: Optional[str], term: str) -> bool:
    return term in (value or "").lower()


def filter_animals(
    animals: List[Record],
    search: str = "",
    species: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Record]:
    """Match ``search`` against name, tag id and breed; species/status must match exactly."""
    term = (search or "").lower()
    result = []
    for animal in animals:
        if term and not (
            _contains(animal.get("name"), term)
            or _contains(animal.get("tag_id"), term)
            or _contains(animal.get("breed"), term)
        ):
            continue
        if species and animal.get("species") != species:
            continue
        if status and animal_status(animal) != status:
            continue
        result.append(animal)
    return result


def filter_owners(owners: List[Record], search: str = "") -> List[Record]:
    """Match ``search`` against full name and email (case-insensitive) or phone (verbatim)."""
    if not search:
        return list(owners)
    term = search.lower()
    return [
        owner for owner in owners
        if _contains(owner_full_name(owner), term)
        or _contains(owner.get("email"), term)
        or search in (owner.get("phone") or "")
    ]


def filter_events(events: List[Record], event_type: Optional[str] = None) -> List[Record]:
    if not event_type:
        return list(events)
    return [event for event in events if event.get("event_type") == event_type]
