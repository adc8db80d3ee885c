import time
from contextlib import contextmanager
from typing import Any, Iterator
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "classify", lines=120):
          ...
    Emits one INFO on exit: "<name>.done ms=<float> key=val ..."
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt_ms = (time.perf_counter() - t0) * 1000
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        logger.info("%s.done ms=%.1f%s", name, dt_ms, suffix)
