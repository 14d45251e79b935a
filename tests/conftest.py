# tests/conftest.py
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from rubric_runner.inliner import StyleInliner, StyledTree
from rubric_runner.managers.config_manager import config_manager

VALID_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="author" content="Grace Hopper">
    <title>Compilers and Moths</title>
    <link rel="stylesheet" href="css/style.css">
  </head>
  <body>
    <h1>Compilers and Moths</h1>
    <img src="img/moth.jpg" alt="The first actual bug">
    <p>The first bug was a real moth, see <a href="https://en.wikipedia.org/wiki/Grace_Hopper">her biography</a>.</p>
    <ul>
      <li>A-0 System</li>
      <li class="important">FLOW-MATIC</li>
      <li>COBOL</li>
    </ul>
  </body>
</html>
"""

VALID_CSS = """body {
  font-size: 16px;
  font-family: "Helvetica Neue", Helvetica, Arial, sans-serif;
}

p {
  line-height: 1.5;
}

img {
  max-height: 400px;
}

li.important {
  color: firebrick;
}
"""


@pytest.fixture
def valid_html() -> str:
    return VALID_HTML


@pytest.fixture
def valid_css() -> str:
    return VALID_CSS


@pytest.fixture
def make_submission(tmp_path):
    """
    Factory die een inzending (index.html + css/style.css) in een tijdelijke map schrijft.
    """
    def _make(html: str = VALID_HTML, css: str = VALID_CSS, name: str = "submission") -> Path:
        root = tmp_path / name
        (root / "css").mkdir(parents=True, exist_ok=True)
        (root / "img").mkdir(exist_ok=True)
        (root / "index.html").write_text(html, encoding="utf-8")
        (root / "css" / "style.css").write_text(css, encoding="utf-8")
        return root
    return _make


@pytest.fixture
def parse():
    """Bouwt de geparste boom zoals de runner dat doet."""
    return lambda html: BeautifulSoup(html, "html5lib")


@pytest.fixture
def styled(make_submission):
    """Bouwt de ge-inlinede boom voor een HTML/CSS-paar."""
    def _styled(html: str = VALID_HTML, css: str = VALID_CSS) -> StyledTree:
        root = make_submission(html, css)
        markup = StyleInliner(root.resolve().as_uri() + "/").inline(html)
        return StyledTree(markup)
    return _styled


@pytest.fixture
def settings():
    """De actieve instellingen; wijzigingen gelden alleen binnen de test."""
    return config_manager.settings


@pytest.fixture(autouse=True)
def fresh_config():
    """Zorgt dat elke test met de configuratie uit settings.json begint."""
    config_manager.reset()
    yield
    config_manager.reset()
