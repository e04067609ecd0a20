import logging
from logging import NullHandler

import pytest

from theme_extractor.render import Palette, RenderOptions
from theme_extractor.scheme import ColorScheme, Mapping

SAMPLE_SCHEME = """<?xml version="1.0" encoding="UTF-8"?>
<scheme name="Sample" version="142" parent_scheme="Darcula">
  <colors>
    <option name="CARET_COLOR" value="bbbbbb"/>
    <option name="GUTTER_BACKGROUND" value="313335"/>
  </colors>
  <attributes>
    <option name="DEFAULT_STRING">
      <value>
        <option name="FOREGROUND" value="6a8759"/>
      </value>
    </option>
    <option name="DEFAULT_NUMBER">
      <value>
        <option name="FOREGROUND" value="6897bb"/>
      </value>
    </option>
    <option name="DEFAULT_KEYWORD">
      <value>
        <option name="FOREGROUND" value="cc7832"/>
        <option name="FONT_TYPE" value="1"/>
      </value>
    </option>
    <option name="DEFAULT_INSTANCE_FIELD">
      <value>
        <option name="FOREGROUND" value="9876aa"/>
      </value>
    </option>
    <option name="DEFAULT_BRACES" baseAttributes="DEFAULT_COMMA"/>
    <option name="DEFAULT_COMMA">
      <value>
        <option name="FOREGROUND" value="cc7832"/>
      </value>
    </option>
  </attributes>
</scheme>
"""


def pytest_configure(config):
    config.addinivalue_line("markers", "property: hypothesis property tests")


@pytest.fixture
def sample_scheme_text():
    return SAMPLE_SCHEME


@pytest.fixture
def sample_scheme():
    return ColorScheme.parse(SAMPLE_SCHEME)


@pytest.fixture
def jetbrains_mapping():
    return Mapping.jetbrains()


@pytest.fixture
def plain_options():
    return RenderOptions(pretty=False, color=False)


@pytest.fixture
def pretty_plain_options():
    return RenderOptions(pretty=True, color=False)


@pytest.fixture
def default_palette():
    return Palette.default()


@pytest.fixture
def preserve_root_logger():
    """Restore root logger handlers and level after code that reconfigures logging."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield root
    for h in root.handlers[:]:
        if h not in old_handlers:
            root.removeHandler(h)
    for h in old_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(old_level)


@pytest.fixture(autouse=True)
def suppress_logging():
    logger = logging.getLogger()
    null_handler = NullHandler()
    logger.addHandler(null_handler)
    yield
    try:
        logger.removeHandler(null_handler)
    except ValueError:
        pass
