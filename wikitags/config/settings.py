# wikitags/config/settings.py

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "https://oldschool.runescape.wiki/api.php"
DEFAULT_MAPPING_URL = "https://prices.runescape.wiki/api/v1/osrs/mapping"


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be > 0, got {value}")
    return value


@dataclass
class WikiTagsConfig:
    command: str = "bt"
    api_url: str = DEFAULT_API_URL
    mapping_url: str = DEFAULT_MAPPING_URL
    timeout_seconds: int = 30
    db_path: str = "data/wikitags.sqlite3"
    user_agent: str | None = None
    fuzzy_cutoff: int = 95

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if not 0 <= self.fuzzy_cutoff <= 100:
            raise ValueError("fuzzy_cutoff must be within 0..100")

    def _escaped_api_url(self) -> str:
        # templates go through str.format later
        return self.api_url.replace("{", "{{").replace("}", "}}")

    @property
    def items_query_template(self) -> str:
        # article namespace only: the catalog holds item pages, not subcategories
        return (
            f"{self._escaped_api_url()}?action=query&list=categorymembers"
            "&cmtitle=Category:{category}&cmnamespace=0"
            "&format=json&cmlimit=max&formatversion=2"
        )

    @property
    def category_query_template(self) -> str:
        return (
            f"{self._escaped_api_url()}?action=query&list=categorymembers"
            "&cmtitle=Category:{category}"
            "&cmlimit=max&format=json&formatversion=2"
        )

    @classmethod
    def from_env(cls) -> "WikiTagsConfig":
        return cls(
            command=os.getenv("WIKITAGS_COMMAND") or cls.command,
            api_url=os.getenv("WIKITAGS_API_URL") or DEFAULT_API_URL,
            mapping_url=os.getenv("WIKITAGS_MAPPING_URL") or DEFAULT_MAPPING_URL,
            timeout_seconds=_env_int("WIKITAGS_TIMEOUT_SECONDS", cls.timeout_seconds),
            db_path=os.getenv("WIKITAGS_DB_PATH") or cls.db_path,
            user_agent=os.getenv("WIKITAGS_USER_AGENT") or None,
            fuzzy_cutoff=_env_int("WIKITAGS_FUZZY_CUTOFF", cls.fuzzy_cutoff),
        )
