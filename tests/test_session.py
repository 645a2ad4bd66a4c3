import threading
from concurrent.futures import Executor
from concurrent.futures.process import BrokenProcessPool
from dataclasses import replace

import numpy as np
import pytest

from halley import InvalidRequestError, RenderRequest, RenderSession, Viewport, render_frame


@pytest.fixture
def request_30():
    return RenderRequest(
        function_key="z³ - 1",
        viewport=Viewport(-3.0, 3.0, -3.0, 3.0),
        width=120,
        height=120,
        max_iterations=30,
        color_scheme="rainbow",
    )


def test_single_submission_commits(small_request):
    completed = []
    session = RenderSession(on_complete=completed.append)
    assert not session.is_rendering
    assert session.submit(small_request) == 1
    result = session.wait(timeout=60)
    assert result is not None
    assert result.request == small_request
    assert not session.is_rendering
    assert session.result is result
    assert completed == [result]


def test_latest_request_supersedes_in_flight_pass(request_30):
    request_50 = replace(request_30, max_iterations=50)
    committed = []
    session = RenderSession(on_complete=committed.append)

    session.submit(request_30)
    session.submit(request_50)
    result = session.wait(timeout=120)

    assert result.request == request_50
    expected = render_frame(request_50)
    assert np.array_equal(result.pixels, expected.pixels)
    assert committed[-1].request == request_50
    assert session.result.request == request_50


def test_superseded_pass_stops_reporting(request_30):
    first_band = threading.Event()
    release = threading.Event()
    progress = []

    def on_progress(request, percent):
        progress.append((request.max_iterations, percent))
        if request.max_iterations == 30:
            first_band.set()
            release.wait(timeout=30)

    session = RenderSession(on_progress=on_progress)
    session.submit(request_30)
    assert first_band.wait(timeout=60)
    session.submit(replace(request_30, max_iterations=50))
    release.set()
    result = session.wait(timeout=120)

    assert result.request.max_iterations == 50
    stale = [percent for iterations, percent in progress if iterations == 30]
    assert stale == [stale[0]]
    fresh = [percent for iterations, percent in progress if iterations == 50]
    assert fresh == sorted(fresh) and fresh[-1] == 100


def test_invalid_submission_leaves_session_untouched(small_request):
    session = RenderSession()
    session.submit(small_request)
    with pytest.raises(InvalidRequestError):
        session.submit(replace(small_request, function_key="nonexistent"))
    result = session.wait(timeout=60)
    assert result.request == small_request


def test_wait_times_out_while_rendering(request_30):
    gate = threading.Event()
    session = RenderSession(on_progress=lambda request, percent: gate.wait(timeout=30))
    session.submit(request_30)
    assert session.wait(timeout=0.05) is None
    assert session.is_rendering
    gate.set()
    assert session.wait(timeout=120) is not None


def test_failing_callback_leaves_session_idle(small_request):
    def on_progress(request, percent):
        raise RuntimeError("callback failed")

    session = RenderSession(on_progress=on_progress)
    session.submit(small_request)
    with pytest.raises(RuntimeError, match="callback failed"):
        session.wait(timeout=60)
    assert not session.is_rendering
    assert isinstance(session.error, RuntimeError)
    assert session.result is None

    session.on_progress = None
    session.submit(small_request)
    assert session.wait(timeout=60).request == small_request
    assert session.error is None


class BrokenExecutor(Executor):
    def map(self, fn, *iterables, timeout=None, chunksize=1):
        raise BrokenProcessPool("worker died")


def test_executor_failure_is_reported(small_request):
    session = RenderSession(executor=BrokenExecutor())
    session.submit(small_request)
    with pytest.raises(BrokenProcessPool):
        session.wait(timeout=60)
    assert not session.is_rendering


def test_superseded_failure_is_dropped(request_30):
    started = threading.Event()
    release = threading.Event()

    def on_progress(request, percent):
        if request.max_iterations == 30:
            started.set()
            release.wait(timeout=30)
            raise RuntimeError("stale pass failed")

    session = RenderSession(on_progress=on_progress)
    session.submit(request_30)
    assert started.wait(timeout=60)
    session.submit(replace(request_30, max_iterations=50))
    release.set()
    result = session.wait(timeout=120)
    assert result.request.max_iterations == 50
    assert session.error is None


def test_on_complete_can_query_session_from_another_thread(small_request):
    seen = []

    def on_complete(result):
        reader = threading.Thread(target=lambda: seen.append((session.is_rendering, session.result is result)))
        reader.start()
        reader.join(timeout=10)
        seen.append(reader.is_alive())

    session = RenderSession(on_complete=on_complete)
    session.submit(small_request)
    assert session.wait(timeout=60) is not None
    assert seen == [(True, True), False]
