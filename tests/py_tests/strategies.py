"""Hypothesis custom strategies for PBT."""
import string

from hypothesis import strategies as st

from es_rest_adapter.ttl import TTL_QUALIFIER_MS

TTL_QUALIFIERS: list[str] = sorted(TTL_QUALIFIER_MS)

# Keep magnitudes within a 64-bit signed range once multiplied by a week
MAX_TTL_AMOUNT = (2**63 - 1) // TTL_QUALIFIER_MS["w"]


def st_ttl_amount() -> st.SearchStrategy[int]:
    return st.integers(min_value=0, max_value=MAX_TTL_AMOUNT)


def st_ttl_qualifier() -> st.SearchStrategy[str]:
    """Known qualifiers in any letter case."""
    return st.sampled_from(TTL_QUALIFIERS).flatmap(
        lambda q: st.tuples(*[st.sampled_from([c.lower(), c.upper()]) for c in q]).map("".join)
    )


def st_unknown_qualifier() -> st.SearchStrategy[str]:
    return st.text(
        alphabet=string.ascii_letters + string.punctuation,
        min_size=1,
        max_size=5,
    ).filter(lambda q: q.lower() not in TTL_QUALIFIER_MS)


def st_property_key() -> st.SearchStrategy[str]:
    return st.from_regex(r"\A[A-Za-z][A-Za-z0-9._-]{0,20}\Z")


def st_property_value() -> st.SearchStrategy[str]:
    """Values without characters that need escaping."""
    return st.from_regex(r"\A[A-Za-z0-9.,/_%-]([A-Za-z0-9 .,/_%-]{0,30}[A-Za-z0-9.,/_%-])?\Z")
