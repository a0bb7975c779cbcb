import io
import json
import logging

import pytest

from map_route.io.search_logging import SearchLogging, default_json_logger
from map_route.search.engine import SearchEngine


def _lines(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines()]


@pytest.fixture
def buf_logger(request):
    buf = io.StringIO()
    name = f"map_route_test.{request.node.name}"
    logger = default_json_logger(name, level="DEBUG", stream=buf)
    logger.propagate = False
    yield logger, buf
    logger.handlers.clear()


def test_one_line_per_query_boundary(ring_graph, buf_logger):
    logger, buf = buf_logger
    hooks = SearchLogging(run_id="r-1", logger=logger)
    res = SearchEngine(hooks).find_path(ring_graph, 0, 2)

    out = _lines(buf)
    assert [o["msg"] for o in out] == ["search_start", "search_end"]
    assert all(o["run_id"] == "r-1" for o in out)
    assert out[0]["kind"] == "discovery"
    assert out[1]["status"] == "found"
    assert out[1]["edges_relaxed"] == res.edges_relaxed
    assert out[1]["level"] == "INFO"


def test_debug_discoveries_are_sampled(ring_graph, buf_logger):
    logger, buf = buf_logger
    hooks = SearchLogging(logger=logger, debug=True, sample_every=1)
    res = SearchEngine(hooks, reopen=True).find_path(ring_graph, 0, 2)

    discovers = [o for o in _lines(buf) if o["msg"] == "discover"]
    assert len(discovers) == res.edges_relaxed
    assert all(o["level"] == "DEBUG" for o in discovers)

    buf.truncate(0)
    buf.seek(0)
    hooks.sample_every = 2
    SearchEngine(hooks, reopen=True).find_path(ring_graph, 0, 2)
    discovers = [o for o in _lines(buf) if o["msg"] == "discover"]
    assert len(discovers) == res.edges_relaxed // 2


def test_invalid_index_is_logged_as_error(ring_graph, buf_logger):
    logger, buf = buf_logger
    with pytest.raises(IndexError):
        SearchEngine(SearchLogging(logger=logger)).find_path(ring_graph, 7, 0)
    (line,) = _lines(buf)
    assert line["level"] == "ERROR"
    assert line["msg"] == "search_error"
    assert line["reason"] == "invalid_index"


def test_default_logger_is_configured_once():
    name = "map_route_test.once"
    a = default_json_logger(name, stream=io.StringIO())
    b = default_json_logger(name, stream=io.StringIO())
    assert a is b
    assert len(a.handlers) == 1
    assert a.level == logging.INFO
    a.handlers.clear()


def test_float_fields_are_rounded(ring_graph, buf_logger):
    logger, buf = buf_logger
    res = SearchEngine(SearchLogging(logger=logger)).find_path(ring_graph, 0, 2)
    end = _lines(buf)[-1]
    assert end["distance_m"] == round(res.distance_m, 3)
    assert end["wall_ms"] == round(end["wall_ms"], 3)


def test_rounding_precision_is_configurable(ring_graph):
    buf = io.StringIO()
    logger = default_json_logger("map_route_test.digits", level="INFO", stream=buf, digits=0)
    logger.propagate = False
    res = SearchEngine(SearchLogging(logger=logger)).find_path(ring_graph, 0, 2)
    end = _lines(buf)[-1]
    assert end["distance_m"] == round(res.distance_m)
    assert end["start"] == 0
    logger.handlers.clear()
