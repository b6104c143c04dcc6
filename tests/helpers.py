"""Test helpers: canned wiki responses and a recording fake transport."""

import asyncio
import json

ITEMS_TEMPLATE = "https://wiki.test/api.php?list=categorymembers&cmtitle=Category:{category}&cmnamespace=0"
CATEGORY_TEMPLATE = "https://wiki.test/api.php?list=categorymembers&cmtitle=Category:{category}"
MAPPING_URL = "https://prices.test/mapping"

ITEMS_URL = ITEMS_TEMPLATE.format(category="items")


def category_url(encoded: str) -> str:
    return CATEGORY_TEMPLATE.format(category=encoded)


def members_page(titles, token=None) -> str:
    """Build a categorymembers response body."""
    body = {"batchcomplete": True, "query": {"categorymembers": [{"ns": 0, "title": t} for t in titles]}}
    if token is not None:
        del body["batchcomplete"]
        body["continue"] = {"cmcontinue": token, "continue": "-||"}
    return json.dumps(body)


def mapping_body(entries) -> str:
    return json.dumps([{"id": i, "name": n, "members": False} for i, n in entries])


class FakeWiki:
    """Serves canned bodies per exact URL and records every request in order.

    A list of bodies is served one per request; the last one repeats.
    """

    def __init__(self, responses=None):
        self.responses = {
            url: list(bodies) if isinstance(bodies, list) else [bodies]
            for url, bodies in (responses or {}).items()
        }
        self.requests = []
        self.error = None
        self.delay = 0.0

    async def __call__(self, url: str) -> str:
        self.requests.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        bodies = self.responses.get(url)
        if not bodies:
            raise AssertionError(f"Unexpected request: {url}")
        return bodies.pop(0) if len(bodies) > 1 else bodies[0]

    def count(self, url: str) -> int:
        return self.requests.count(url)
