"""
Reconcile free-text model names (language-model output) against the catalog.

Identity is the club slug assigned at ingestion time. Lookup order:

1. Exact key: slug of the suggested name == club slug, or == slug of the
   bare model name ("G430" -> "g430").
2. Similarity fallback: every word of the suggested name must overlap a word
   of "brand model" (or "model"), and the normalized strings must be similar
   enough. This is a heuristic; every fallback match is logged at WARNING so
   ambiguous pairs ("Rogue" vs "Rogue ST Max") are visible.
"""

import logging
import re
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import List, Literal, Optional, Sequence, Tuple

from clubfit.config import settings
from clubfit.schemas.clubs import Club

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    club: Club
    method: Literal["exact", "similar"]
    score: float


def normalize_model_name(name: str) -> str:
    """Lowercase, '&' -> 'and', punctuation -> space, collapse whitespace."""
    text = (name or "").lower().replace("&", " and ")
    text = text.replace("'", "")
    text = re.sub(r"[^a-z0-9]+", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def make_slug(*parts: str) -> str:
    """
    Build the stable catalog key from brand/model text.

    >>> make_slug("Titleist", "T200 (2023)")
    'titleist_t200_2023'
    """
    return normalize_model_name(" ".join(p for p in parts if p)).replace(" ", "_")


def _similarity(a: str, b: str) -> float:
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    # Containment only counts when the shorter side is specific enough
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if f" {shorter} " in f" {longer} " and (len(shorter.split()) >= 2 or len(shorter) >= 4):
        return 1.0
    return SequenceMatcher(None, a, b).ratio()


def _covers(name: str, target: str) -> bool:
    """Every word of ``name`` overlaps some word of ``target``."""
    target_words = target.split()
    return all(
        any(word in other or other in word for other in target_words)
        for word in name.split()
    )


def match_model_name(
    name: str,
    clubs: Sequence[Club],
    threshold: Optional[float] = None,
) -> Optional[MatchResult]:
    """
    Find the catalog club for a suggested model name.

    Returns None when neither the exact key nor the similarity fallback
    (ratio >= threshold) finds a club. Ties go to the earlier catalog entry.
    """
    if threshold is None:
        threshold = settings.MATCH_SIMILARITY_THRESHOLD

    key = make_slug(name)
    if not key:
        return None

    for club in clubs:
        if key == club.slug or key == make_slug(club.model):
            return MatchResult(club=club, method="exact", score=1.0)

    normalized = normalize_model_name(name)
    best: Optional[MatchResult] = None
    for club in clubs:
        targets = (
            normalize_model_name(club.display_name),
            normalize_model_name(club.model),
        )
        score = max(
            (_similarity(normalized, target) for target in targets if _covers(normalized, target)),
            default=0.0,
        )
        if score >= threshold and (best is None or score > best.score):
            best = MatchResult(club=club, method="similar", score=score)

    if best is not None:
        logger.warning(
            f"Fuzzy-matched '{name}' to '{best.club.display_name}' "
            f"(slug={best.club.slug}, score={best.score:.2f})"
        )
    return best


def reconcile_model_names(
    names: Sequence[str],
    clubs: Sequence[Club],
) -> Tuple[List[Club], List[str]]:
    """
    Split suggested names into catalog clubs and names with no match.

    Returns:
        (matched clubs in suggestion order without duplicates,
         unmatched names in suggestion order without duplicates)
    """
    matched: List[Club] = []
    unmatched: List[str] = []
    seen_slugs = set()
    seen_names = set()

    for name in names:
        result = match_model_name(name, clubs)
        if result is None:
            key = make_slug(name)
            if key and key not in seen_names:
                seen_names.add(key)
                unmatched.append(name)
            logger.info(f"No catalog match for '{name}'")
            continue
        if result.method == "exact":
            logger.info(f"Exact catalog match for '{name}' -> {result.club.slug}")
        if result.club.slug not in seen_slugs:
            seen_slugs.add(result.club.slug)
            matched.append(result.club)

    return matched, unmatched
