# wikitags/scrape/category/parse_category.py

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional

from wikitags.http.errors import MalformedResponseError
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


@dataclass
class CategoryMembersPage:
    titles: List[str] = field(default_factory=list)
    continue_token: Optional[str] = None


def _load_object(text: str) -> dict:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object at top level, got {type(data).__name__}"
        )

    error = data.get("error")
    if error is not None:
        if isinstance(error, dict):
            code = error.get("code", "unknown")
            info = error.get("info", "")
            message = f"API error {code}: {info}" if info else f"API error {code}"
            raise MalformedResponseError(message)
        raise MalformedResponseError(f"API error: {error!r}")

    return data


def extract_titles(query: Any) -> List[str]:
    if not isinstance(query, dict):
        raise MalformedResponseError(
            f"'query' must be an object, got {type(query).__name__}"
        )

    members = query.get("categorymembers")
    if members is None:
        return []
    if not isinstance(members, list):
        raise MalformedResponseError(
            f"'categorymembers' must be a list, got {type(members).__name__}"
        )

    titles: List[str] = []
    for i, member in enumerate(members):
        if not isinstance(member, dict):
            raise MalformedResponseError(f"categorymembers[{i}] is not an object")
        title = member.get("title")
        if not isinstance(title, str):
            raise MalformedResponseError(f"categorymembers[{i}] has no string 'title'")
        titles.append(title)

    return titles


def extract_continue_token(data: dict, continue_key: str) -> Optional[str]:
    cont = data.get("continue")
    if cont is None:
        return None
    if not isinstance(cont, dict):
        raise MalformedResponseError(
            f"'continue' must be an object, got {type(cont).__name__}"
        )

    token = cont.get(continue_key)
    if not isinstance(token, str):
        raise MalformedResponseError(f"'continue' has no string '{continue_key}'")
    return token


def parse_members_page(
    text: str,
    *,
    continue_key: str = "cmcontinue",
    continuation_expected: bool = False,
) -> CategoryMembersPage:
    """
    Parse one `list=categorymembers` response.

    A body with neither "query" nor "continue" is an empty final page. A
    missing "query" is only an error when a page was expected: the request
    carried a continuation token, or the body advertises another page.
    """
    data = _load_object(text)

    token = extract_continue_token(data, continue_key)

    if "query" not in data:
        if continuation_expected or token is not None:
            raise MalformedResponseError("Response is missing 'query' mid-pagination")
        log.debug("Response has no 'query'; treating as empty final page")
        return CategoryMembersPage()

    titles = extract_titles(data["query"])

    log.debug("Parsed members page: %d titles, continue=%s", len(titles), token is not None)
    return CategoryMembersPage(titles=titles, continue_token=token)
