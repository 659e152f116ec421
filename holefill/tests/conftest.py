import datetime
import io
import logging
import pathlib

import pytest

LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport (with .outcome) to the item so fixtures can see the
    # outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def holefill_logs(request):
    """Capture the 'holefill' logger family into an in-memory buffer.

    The buffer is yielded so tests can inspect messages; it is written to
    ``test-logs/`` only when the test call phase failed.
    """
    from holefill.core.logging_utils import get_logger
    root = get_logger('holefill')
    prev_handlers = list(root.handlers)
    prev_level = root.level
    for h in prev_handlers:
        root.removeHandler(h)

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    try:
        yield buf
    finally:
        root.removeHandler(handler)
        root.setLevel(prev_level)
        for h in prev_handlers:
            root.addHandler(h)

        rep = getattr(request.node, "rep_call", None)
        if rep is not None and getattr(rep, "outcome", None) == "failed":
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            try:
                LOG_DIR.mkdir(exist_ok=True)
                with open(LOG_DIR / f"{nodeid}__{ts}.log", "w", encoding="utf-8") as f:
                    f.write(f"=== Test: {request.node.nodeid}\n=== Timestamp: {ts}\n\n")
                    f.write(buf.getvalue())
            except OSError:
                pass
