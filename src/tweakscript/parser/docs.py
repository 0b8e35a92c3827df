from __future__ import annotations

from typing import Sequence

from tweakscript.exceptions import InvalidArgumentError


def parse_doc_urls(docs: str | Sequence[str] | None) -> tuple[str, ...]:
    """Normalize a `docs` field (one URL or a list of URLs)."""
    if docs is None:
        return ()
    urls = [docs] if isinstance(docs, str) else list(docs)
    for url in urls:
        if not isinstance(url, str) or not url.strip():
            raise InvalidArgumentError(f"invalid documentation url: {url!r}")
    return tuple(urls)
