from typing import List, Sequence

from .records import VolunteerRecord


def matches_term(record: VolunteerRecord, term: str) -> bool:
    """Case-insensitive match on name, code and address; plain substring on the mobile number."""
    if not term:
        return True

    folded = term.lower()
    return (
        folded in record.name.lower()
        or folded in record.membership_code.lower()
        or term in record.mobile_number
        or folded in record.address.lower()
    )


def filter_records(
    records: Sequence[VolunteerRecord],
    search_term: str = "",
    category: str = "",
) -> List[VolunteerRecord]:
    """Project the visible subset; both predicates must hold and order is preserved."""
    return [
        record for record in records
        if matches_term(record, search_term)
        and (not category or record.membership_code == category)
    ]


def membership_categories(records: Sequence[VolunteerRecord]) -> List[str]:
    return sorted({record.membership_code for record in records if record.membership_code})
