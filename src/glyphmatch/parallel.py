from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass

import numpy as np

from glyphmatch.engine import GlyphMatcherContext
from glyphmatch.surface import Surface, TextSurface
from glyphmatch.tiling import match_band, row_bands
from glyphmatch.work_queue import WorkQueue

logger = logging.getLogger(__name__)


def default_thread_count() -> int:
    return (os.cpu_count() or 1) + 1


@dataclass
class WorkItem:
    band: Surface
    output: np.ndarray  # row of the text surface the band maps to


class ParallelAsciifier:
    """Spreads the row bands of each frame over a fixed pool of worker threads.

    Every worker builds its own matcher from the shared context when it starts.
    ``generate`` queues one item per band and blocks until all of them are
    processed, so it behaves like the sequential engine from the outside.
    Bands write to disjoint rows of the text surface, which keeps the output
    independent of the thread count.
    """

    def __init__(self, context: GlyphMatcherContext, thread_count: int = 0, queue_size: int = 0):
        if thread_count < 0:
            raise ValueError(f"Thread count must not be negative, got {thread_count}")
        if thread_count == 0:
            thread_count = default_thread_count()
        self._context = context
        self._queue: WorkQueue[WorkItem] = WorkQueue(maxsize=queue_size)
        self._generate_lock = threading.Lock()
        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()
        self._closed = False
        self._started = threading.Semaphore(0)
        self._threads = [
            threading.Thread(target=self._worker, name=f"asciifier-{i}", daemon=True) for i in range(thread_count)
        ]
        for thread in self._threads:
            thread.start()
        # Every worker reports once its matcher exists or failed to build
        for _ in self._threads:
            self._started.acquire()
        with self._errors_lock:
            errors, self._errors = self._errors, []
        if errors:
            self._queue.close()
            for thread in self._threads:
                thread.join()
            self._closed = True
            raise errors[0]
        logger.debug("Started %d asciifier threads", thread_count)

    @property
    def context(self) -> GlyphMatcherContext:
        return self._context

    @property
    def thread_count(self) -> int:
        return len(self._threads)

    def generate(self, image: Surface, text: TextSurface) -> None:
        if not isinstance(image, Surface):
            image = Surface(image)
        with self._generate_lock:
            if self._closed:
                raise RuntimeError("Asciifier is closed")
            count = 0
            for row, band in row_bands(image, text, self._context.cell_width, self._context.cell_height):
                self._queue.push(WorkItem(band=band, output=text.row(row)))
                count += 1
            logger.debug("Dispatched %d bands", count)
            self._queue.wait_empty()

            with self._errors_lock:
                errors, self._errors = self._errors, []
            if errors:
                raise errors[0]

    def _worker(self) -> None:
        try:
            matcher = self._context.create_matcher()
            scratch = Surface.zeros(self._context.cell_width, self._context.cell_height, dtype=np.float64)
        except Exception as e:
            with self._errors_lock:
                self._errors.append(e)
            return
        finally:
            self._started.release()
        while True:
            item = self._queue.wait_pop()
            if item is None:
                break
            try:
                match_band(matcher, item.band, item.output, scratch)
            except Exception as e:
                with self._errors_lock:
                    self._errors.append(e)
            finally:
                self._queue.done()

    def close(self) -> None:
        with self._generate_lock:
            if self._closed:
                return
            self._closed = True
        self._queue.close()
        for thread in self._threads:
            thread.join()
        logger.debug("Stopped %d asciifier threads", len(self._threads))

    def __enter__(self) -> ParallelAsciifier:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
