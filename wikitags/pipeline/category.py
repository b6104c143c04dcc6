# wikitags/pipeline/category.py

from __future__ import annotations

from typing import Awaitable, Callable, Set
from urllib.parse import quote_plus

from wikitags.http.errors import MalformedResponseError, WikiTagsError
from wikitags.scrape.category.parse_category import CategoryMembersPage, parse_members_page
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)

FetchText = Callable[[str], Awaitable[str]]
ParsePage = Callable[..., CategoryMembersPage]


def build_category_url(endpoint_template: str, category_key: str) -> str:
    return endpoint_template.format(category=quote_plus(category_key))


def build_continue_url(base_url: str, continue_key: str, token: str) -> str:
    return f"{base_url}&{continue_key}={quote_plus(token)}"


class PagedCategoryFetcher:
    """
    Follows a continuation-token protocol until exhausted and collects every
    member title into a set.

    Pages are requested strictly in order; each continuation request is built
    from the initial URL plus the latest token. Any failure aborts the whole
    fetch, so a partial set is never returned.
    """

    def __init__(
        self,
        fetch: FetchText,
        *,
        continue_key: str = "cmcontinue",
        parse_page: ParsePage = parse_members_page,
    ):
        self._fetch = fetch
        self._continue_key = continue_key
        self._parse_page = parse_page

    async def fetch_all(self, endpoint_template: str, category_key: str) -> Set[str]:
        base_url = build_category_url(endpoint_template, category_key)

        titles: Set[str] = set()
        seen_tokens: Set[str] = set()
        token: str | None = None
        pages = 0

        while True:
            url = base_url if token is None else build_continue_url(base_url, self._continue_key, token)

            log.debug("Requesting page %d: %s", pages + 1, url)
            text = await self._fetch(url)

            try:
                page = self._parse_page(
                    text,
                    continue_key=self._continue_key,
                    continuation_expected=token is not None,
                )
            except WikiTagsError as e:
                e.url = e.url or url
                log.warning("Malformed page %d for %r: %s", pages + 1, category_key, e)
                raise

            pages += 1
            titles.update(page.titles)
            log.debug("Page %d: %d members (%d unique so far)", pages, len(page.titles), len(titles))

            token = page.continue_token
            if token is None:
                break

            if token in seen_tokens:
                raise MalformedResponseError(
                    f"Continuation token {token!r} repeated; refusing to loop",
                    url=url,
                )
            seen_tokens.add(token)

        log.info("Fetched %d members of %r across %d pages", len(titles), category_key, pages)
        return titles
