# io/search_logging.py
import json
import logging
import sys

from map_route.search.hooks import NoopHooks


def default_json_logger(name="map_route", level="INFO", stream=None, digits: int = 3):
    """JSON-lines logger. Float fields (metres, milliseconds, g/h costs) are rounded to `digits`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(
                        {k: round(v, digits) if isinstance(v, float) else v for k, v in extra.items()}
                    )
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs for search queries: one INFO line per query start/end,
    sampled DEBUG lines per discovered node when `debug` is on.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or default_json_logger(level=level)
        self._discovered = 0

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    # --------------------------------------------------------

    def search_start(self, *, start, end, nodes, kind):
        self._discovered = 0
        self._emit("INFO", "search_start", start=start, end=end, nodes=nodes, kind=kind)

    def search_end(self, *, start, end, status, distance_m, edges_relaxed, wall_ms):
        self._emit(
            "INFO",
            "search_end",
            start=start,
            end=end,
            status=status,
            distance_m=distance_m,
            edges_relaxed=edges_relaxed,
            wall_ms=wall_ms,
        )

    def discover(self, *, node, previous, g, h, qsize):
        self._discovered += 1
        if self.debug and (self._discovered % self.sample_every) == 0:
            self._emit("DEBUG", "discover", node=node, previous=previous, g=g, h=h, qsize=qsize)

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "search_error", reason=reason, **kw)
