from collections.abc import Callable
from pathlib import Path

import pytest

from querymanager.engines.query import QueryManager, QueryManagerConfig

RESOURCES = Path(__file__).parent / "resources" / "querymanager"


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def config() -> QueryManagerConfig:
    return QueryManagerConfig(
        template_location=RESOURCES,
        query_id_prefix="ID:",
        string_wrap_with="'",
        trim_id_whitespace=True,
        var_match_regex=r"\$\{([^\}]*)\}",
        new_line="\n",
    )


@pytest.fixture
def manager(config: QueryManagerConfig) -> QueryManager:
    qm = QueryManager(config)
    qm.start()
    return qm


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[..., Path]:
    """Write *content* to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "queries.txt") -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content.encode("utf-8"))
        return p

    return _write
