"""
Grouping of card entries into unique (code, artwork) cards.

A set list row fans out to one entry per rarity, and the same code can
appear on several rows (reprints in another rarity, alternate artworks).
Entries sharing a code and artwork become a single CardGroup holding every
rarity seen for it.
"""

from collections import Counter
from collections.abc import Iterable

from cardvault.models.card import ArtworkKind, BatchStatistics, CardEntry, CardGroup, DuplicateCode

# Card codes never contain "|"
KEY_SEPARATOR = "|"


def card_key(code: str, artwork: ArtworkKind) -> str:
    """Composite grouping key for a (code, artwork) pair."""
    return f"{code}{KEY_SEPARATOR}{artwork.value}"


def aggregate(entries: list[CardEntry]) -> dict[str, CardGroup]:
    """
    Group entries by (code, artwork), collecting rarities.

    The first entry of a group provides its names.

    Args:
        entries: Card entries in table order

    Returns:
        Groups keyed by card_key(), in first-seen order
    """
    groups: dict[str, CardGroup] = {}

    for entry in entries:
        key = card_key(entry.code, entry.artwork)
        group = groups.get(key)
        if group is None:
            group = CardGroup(
                code=entry.code,
                name_english=entry.name_english,
                name_localized=entry.name_localized,
                artwork=entry.artwork,
            )
            groups[key] = group
        group.rarities.add(entry.rarity)

    return groups


def compute_batch_statistics(entries: list[CardEntry]) -> BatchStatistics:
    """
    Compute informational statistics over the flat entry list.

    Duplicates are codes appearing on more than one entry; the duplicate
    count sums the extra occurrences.
    """
    stats = BatchStatistics(total_entries=len(entries))
    code_occurrences: Counter[str] = Counter()

    for entry in entries:
        code_occurrences[entry.code] += 1
        stats.rarity_counts[entry.rarity] = stats.rarity_counts.get(entry.rarity, 0) + 1
        stats.artwork_counts[entry.artwork] += 1

    stats.unique_codes = len(code_occurrences)
    stats.duplicate_entries = [
        DuplicateCode(code=code, count=count)
        for code, count in code_occurrences.items()
        if count > 1
    ]
    stats.duplicates = sum(d.count - 1 for d in stats.duplicate_entries)

    return stats


def artwork_distribution(groups: Iterable[CardGroup]) -> dict[ArtworkKind, int]:
    """Number of grouped cards per artwork kind."""
    distribution = {kind: 0 for kind in ArtworkKind}
    for group in groups:
        distribution[group.artwork] += 1
    return distribution
