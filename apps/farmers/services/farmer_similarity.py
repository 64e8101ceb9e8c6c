"""
Farmer name similarity report using fuzzy matching.

Read-only: it surfaces likely duplicate farmers for a root user to review
and never merges or renames anything.
"""

from typing import List, Tuple
import re

from fuzzywuzzy import fuzz

from apps.accounts.access import Action, ensure_allowed

from ..models import Farmer


# Thresholds for fuzzy matching
HIGH_SIMILARITY_THRESHOLD = 90
MEDIUM_SIMILARITY_THRESHOLD = 80

MAX_RESULTS = 20


def normalize_name(name: str) -> str:
    """
    Normalize a name for comparison.

    Only case and whitespace are folded; punctuation and combining marks
    are meaningful in Thai names.
    """
    name = name.lower().strip()
    return re.sub(r'\s+', ' ', name)


def find_similar_farmers(
    *,
    actor,
    name: str,
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[Farmer, int]]:
    """
    Find farmers whose names resemble ``name``.

    Args:
        actor: User requesting the report (root only)
        name: Name to compare against
        threshold: Minimum similarity score (0-100)

    Returns:
        List of (farmer, similarity_score), best match first
    """
    ensure_allowed(actor, Action.FARMER_MANAGE)

    target = normalize_name(name)
    if not target:
        return []

    matches = []
    for farmer in Farmer.objects.all():
        score = fuzz.ratio(target, normalize_name(farmer.name))
        if score >= threshold:
            matches.append((farmer, score))

    matches.sort(key=lambda x: x[1], reverse=True)
    return matches[:MAX_RESULTS]


def find_duplicate_farmers(
    *,
    actor,
    threshold: int = HIGH_SIMILARITY_THRESHOLD
) -> List[dict]:
    """
    Scan the whole directory for pairs of likely duplicates.

    Returns:
        List of {'farmers': [a, b], 'similarity': int}, highest first
    """
    ensure_allowed(actor, Action.FARMER_MANAGE)

    farmers = list(Farmer.objects.order_by('name'))
    normalized = [normalize_name(f.name) for f in farmers]

    pairs = []
    for i, first in enumerate(farmers):
        for j in range(i + 1, len(farmers)):
            similarity = fuzz.ratio(normalized[i], normalized[j])
            if similarity >= threshold:
                pairs.append({
                    'farmers': [first, farmers[j]],
                    'similarity': similarity,
                })

    pairs.sort(key=lambda x: x['similarity'], reverse=True)
    return pairs[:MAX_RESULTS]
