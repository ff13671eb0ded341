"""
Usage reports computed from a store snapshot.

Pure functions: they never touch the live store, so the caller can
run them after the store lock has been released.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from shortlink_app.store.models import Entry


def extract_domain(url: str) -> Optional[str]:
    """
    Host segment of a URL: the text between the first "://" and the
    next "/" (or the end of the string).
    
    Returns None when the URL has no scheme://host shape.
    """
    _, separator, remainder = url.partition("://")
    if not separator:
        return None
    domain = remainder.split("/", 1)[0]
    return domain or None


def top_domains(entries: Iterable[Entry], n: int = 3) -> List[Tuple[str, int]]:
    """
    Rank domains by the total hits of their entries.
    
    Entries without a recognizable domain are left out. Ties keep the
    order in which domains were first seen.
    """
    totals: Dict[str, int] = {}
    for entry in entries:
        domain = extract_domain(entry.original_url)
        if domain is None:
            continue
        totals[domain] = totals.get(domain, 0) + entry.hit_count
    
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked[:max(n, 0)]


def top_urls(entries: Iterable[Entry], n: int = 3) -> List[Entry]:
    """Most-hit entries first, ties in snapshot order"""
    ranked = sorted(entries, key=lambda entry: entry.hit_count, reverse=True)
    return ranked[:max(n, 0)]
