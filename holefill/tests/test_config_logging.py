import io
import logging

import pytest

from holefill.core.config import IslandFillConfig
from holefill.core.logging_utils import configure_logging, get_logger


def test_default_config_is_valid():
    cfg = IslandFillConfig()
    assert cfg.validate() is cfg
    assert cfg.memoize and cfg.prune_invalid and cfg.prune_by_bound
    assert cfg.island_exclusion == 'same_island'


@pytest.mark.parametrize("kwargs", [
    {'island_exclusion': 'union'},
    {'max_calls': 0},
    {'time_limit': -1.0},
    {'recursion_limit': 10},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        IslandFillConfig(**kwargs).validate()


def test_get_logger_namespace():
    log = get_logger('demo')
    assert log.name == 'holefill.demo'
    assert get_logger('holefill.demo') is log
    assert get_logger('holefill.demo', level='ERROR').level == logging.ERROR
    assert logging.getLogger('holefill').propagate is False


def test_configure_logging_stream():
    root = logging.getLogger('holefill')
    saved_handlers, saved_level = list(root.handlers), root.level
    buf = io.StringIO()
    try:
        configure_logging('DEBUG', stream=buf)
        get_logger('demo').debug("hello %d", 42)
        assert "DEBUG holefill.demo: hello 42" in buf.getvalue()
        configure_logging('bogus')
        assert root.level == logging.INFO
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
