"""Background render session where each submission supersedes the last."""

from __future__ import annotations

import threading
from concurrent.futures import Executor
from typing import Callable, Optional

from .renderer import RenderPass, RenderRequest, RenderResult


class RenderSession:
    """Own the single in-flight render for a view.

    ``submit`` is the only cancellation signal: a newer submission makes any
    older pass stop at its next band boundary and drop its buffer, so a
    committed result always reflects exactly one request. ``on_complete``
    runs on the render thread, outside the session lock, before ``wait``
    returns. If the latest pass fails, the session goes idle and ``wait``
    re-raises the error.
    """

    def __init__(
        self,
        on_progress: Optional[Callable[[RenderRequest, int], None]] = None,
        on_complete: Optional[Callable[[RenderResult], None]] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.on_progress = on_progress
        self.on_complete = on_complete
        self.executor = executor
        self._lock = threading.RLock()
        self._committed = threading.Condition(self._lock)
        self._generation = 0
        self._finished = 0
        self._result: Optional[RenderResult] = None
        self._error: Optional[BaseException] = None

    @property
    def result(self) -> Optional[RenderResult]:
        """The most recently committed frame."""

        with self._lock:
            return self._result

    @property
    def error(self) -> Optional[BaseException]:
        """The exception that ended the latest pass, if any."""

        with self._lock:
            return self._error

    @property
    def is_rendering(self) -> bool:
        with self._lock:
            return self._finished != self._generation

    def submit(self, request: RenderRequest) -> int:
        """Start rendering ``request``, superseding any in-flight pass.

        Invalid requests raise before anything is superseded.
        """

        render_pass = RenderPass(request, executor=self.executor)
        with self._lock:
            self._generation += 1
            self._error = None
            generation = self._generation
        thread = threading.Thread(
            target=self._run,
            args=(generation, render_pass),
            name=f"halley-render-{generation}",
            daemon=True,
        )
        thread.start()
        return generation

    def wait(self, timeout: Optional[float] = None) -> Optional[RenderResult]:
        """Block until the latest submission finishes; ``None`` on timeout.

        Raises the exception that ended the latest pass, if it failed.
        """

        with self._committed:
            done = self._committed.wait_for(lambda: self._finished == self._generation, timeout=timeout)
            if not done:
                return None
            if self._error is not None:
                raise self._error
            return self._result

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _render(self, generation: int, render_pass: RenderPass) -> bool:
        passes = iter(render_pass)
        try:
            for percent in passes:
                if not self._is_current(generation):
                    return False
                if self.on_progress is not None:
                    self.on_progress(render_pass.request, percent)
        finally:
            passes.close()
        return True

    def _commit(self, generation: int, result: RenderResult) -> bool:
        with self._lock:
            if generation != self._generation:
                return False
            self._result = result
            return True

    def _finish(self, generation: int, error: Optional[BaseException] = None) -> None:
        with self._committed:
            if generation != self._generation:
                return
            self._error = error
            self._finished = generation
            self._committed.notify_all()

    def _run(self, generation: int, render_pass: RenderPass) -> None:
        try:
            if self._render(generation, render_pass) and self._commit(generation, render_pass.result):
                if self.on_complete is not None:
                    self.on_complete(render_pass.result)
        except BaseException as exc:
            # Stored for wait(); a failure from a superseded pass is dropped.
            self._finish(generation, exc)
        else:
            self._finish(generation)
