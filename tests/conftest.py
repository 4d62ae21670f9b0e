"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jtml.parser import parse_source


# =============================================================================
# SOURCE FIXTURES
# =============================================================================

PAGE_SOURCE = '''
html(lang="ja"){
    head(){
        meta(charset="UTF-8")
        meta(http-equiv="X-UA-Compatible" content="IE=edge")
        title(){"document"}
    }
    body(){
        // page body
        main(){
            h1(){"Hello World!"}
            img(hoge="hoge" huga="huga")
        }
    }
}'''


@pytest.fixture
def page_source():
    """A complete page exercising elements, void tags, text and comments."""
    return PAGE_SOURCE


@pytest.fixture
def page_ast(page_source):
    """Parsed AST of page_source."""
    return parse_source(page_source)


@pytest.fixture
def write_jtml(tmp_path):
    """Factory writing a .jtml file under tmp_path and returning its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Keep config loading away from the user's home and the working directory."""
    from jtml import config

    monkeypatch.setattr(config, "CONFIG_SEARCH_PATHS", [tmp_path / "jtml.yaml"])
    monkeypatch.delenv("JTML_INDENT", raising=False)
    monkeypatch.delenv("JTML_IGNORE_COMMENTS", raising=False)
    monkeypatch.setattr(config, "_config", None)
    return tmp_path / "jtml.yaml"
