from __future__ import annotations

import pytest
from fastapi import HTTPException

from shop_api.common.search import escape_like, normalize_search


def test_escape_like_escapes_wildcards() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_normalize_search_collapses_whitespace() -> None:
    assert normalize_search("  smart    phone ") == "smart phone"


def test_normalize_search_blank_is_none() -> None:
    assert normalize_search(None) is None
    assert normalize_search("   ") is None


@pytest.mark.parametrize("term", ["a", "x" * 129])
def test_normalize_search_enforces_length(term: str) -> None:
    with pytest.raises(HTTPException) as excinfo:
        normalize_search(term)
    assert excinfo.value.status_code == 422
