"""
Result Summary - Aggregate counts over a finished batch
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable
from ..result import CheckResult


@dataclass(frozen=True)
class Summary:
    """Counts reported at the end of a run"""
    total: int = 0
    accessible: int = 0
    inaccessible: int = 0
    redirected: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def summarize(results: Iterable[CheckResult]) -> Summary:
    """
    Compute summary counts in a single pass

    Args:
        results: Check results in any order

    Returns:
        Summary with total, accessible, inaccessible and redirected counts
    """
    total = 0
    accessible = 0
    redirected = 0

    for result in results:
        total += 1
        if not result.accessible:
            continue
        accessible += 1
        if result.was_redirected:
            redirected += 1

    return Summary(
        total=total,
        accessible=accessible,
        inaccessible=total - accessible,
        redirected=redirected
    )
