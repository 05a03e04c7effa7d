"""Sequential batch processing of images and document pages."""

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import structlog

from .errors import RedactionError
from .extractors.pdf_extractor import PDFPageRasterizer
from .extractors.sources import classify_source
from .models.entities import (
    BatchItem,
    BatchItemSnapshot,
    BatchProgress,
    BatchStatus,
    DetectionConfig,
    ImageSource,
    PageSource,
    ScanResult,
    SourceRef,
)
from .pipeline import RedactionPipeline

logger = structlog.get_logger(__name__)

ItemObserver = Callable[[BatchItemSnapshot], None]
ProgressObserver = Callable[[BatchProgress], None]


@dataclass
class SubmissionReport:
    """Outcome of a submission: items queued and sources rejected."""

    items: List[BatchItem] = field(default_factory=list)
    rejected: List[Tuple[str, str]] = field(default_factory=list)  # (path, reason)


def output_filename(item: BatchItem) -> str:
    stem, _ = os.path.splitext(item.name)
    return f"redacted-{stem}.png"


class BatchOrchestrator:
    """Drive queued items through the pipeline one at a time.

    Items run strictly in FIFO order and at most one is in PROCESSING at any
    moment. A failure in any stage marks that item ERROR and the loop moves
    on. Observers receive immutable snapshots after every transition. An
    observer that raises is logged and does not stop the run.
    """

    def __init__(
        self,
        pipeline: RedactionPipeline,
        rasterizer: Optional[PDFPageRasterizer] = None,
        on_item: Optional[ItemObserver] = None,
        on_progress: Optional[ProgressObserver] = None,
    ):
        self.pipeline = pipeline
        self.rasterizer = rasterizer or PDFPageRasterizer()
        self.on_item = on_item
        self.on_progress = on_progress
        self._items: List[BatchItem] = []
        self._progress = BatchProgress()
        self._running = False
        self._stop_requested = False
        self._generation = 0

    @property
    def items(self) -> Tuple[BatchItem, ...]:
        return tuple(self._items)

    @property
    def progress(self) -> BatchProgress:
        return self._progress

    # --- Submission ---------------------------------------------------------

    def submit(self, paths: Iterable[str]) -> SubmissionReport:
        """Queue files for processing.

        Images are queued first in submission order, then one item per page
        of every PDF, documents in submission order and pages ascending.
        Documents over the size or page ceiling are rejected whole before
        any page is rendered.
        """
        report = SubmissionReport()
        images: List[SourceRef] = []
        pages: List[SourceRef] = []

        for path in paths:
            kind = classify_source(path)
            if kind == "image":
                images.append(ImageSource(path))
            elif kind == "pdf":
                try:
                    page_count = self.rasterizer.inspect(path)
                except RedactionError as e:
                    logger.warning("document_rejected", path=path, reason=str(e))
                    report.rejected.append((path, str(e)))
                    continue
                pages.extend(PageSource(path, n) for n in range(page_count))
            else:
                reason = "Unsupported file type"
                logger.warning("source_rejected", path=path, reason=reason)
                report.rejected.append((path, reason))

        report.items = self.add_sources(images + pages)
        return report

    def add_sources(self, sources: Sequence[SourceRef]) -> List[BatchItem]:
        """Append already resolved sources to the queue in the given order."""
        new_items = [BatchItem(source=source) for source in sources]
        self._items.extend(new_items)
        if new_items:
            logger.info("batch_items_queued", count=len(new_items), queued=len(self._items))
        return new_items

    # --- Control ------------------------------------------------------------

    def stop(self) -> None:
        """Stop scheduling further items once the current one finishes."""
        self._stop_requested = True

    def reset(self) -> None:
        """Discard all items and progress. An in-flight item is not interrupted."""
        self._items = []
        self._generation += 1
        self._stop_requested = self._running
        self._set_progress(BatchProgress())

    # --- Processing ---------------------------------------------------------

    def run(self, config: DetectionConfig) -> BatchProgress:
        """Process every pending item synchronously."""
        generation, pending = self._start_run()
        try:
            for index, item in enumerate(pending):
                if self._should_stop(generation):
                    break
                self._begin(item, index)
                try:
                    with structlog.contextvars.bound_contextvars(batch_item=item.id, item_index=index):
                        result = self.pipeline.process(item.source, config)
                except Exception as e:
                    self._fail(item, e)
                else:
                    self._complete(item, result)
                self._advance(generation, index + 1, len(pending))
        finally:
            self._finish_run(generation)
        return self._progress

    async def run_async(self, config: DetectionConfig) -> BatchProgress:
        """Process every pending item, awaiting recognition one item at a time."""
        generation, pending = self._start_run()
        try:
            for index, item in enumerate(pending):
                if self._should_stop(generation):
                    break
                self._begin(item, index)
                try:
                    with structlog.contextvars.bound_contextvars(batch_item=item.id, item_index=index):
                        result = await self.pipeline.process_async(item.source, config)
                except Exception as e:
                    self._fail(item, e)
                else:
                    self._complete(item, result)
                self._advance(generation, index + 1, len(pending))
        finally:
            self._finish_run(generation)
        return self._progress

    def outputs(self) -> List[Tuple[str, object]]:
        """Completed rasters with output filenames, in queue order."""
        return [
            (output_filename(item), item.output_raster)
            for item in self._items
            if item.status is BatchStatus.COMPLETE and item.output_raster is not None
        ]

    # --- Internals ----------------------------------------------------------

    def _start_run(self) -> Tuple[int, List[BatchItem]]:
        if self._running:
            raise RuntimeError("Batch is already running")
        self._running = True
        self._stop_requested = False
        pending = [item for item in self._items if item.status is BatchStatus.PENDING]
        logger.info("batch_started", total=len(pending))
        self._set_progress(BatchProgress(current=0, total=len(pending), is_processing=bool(pending)))
        return self._generation, pending

    def _should_stop(self, generation: int) -> bool:
        return self._stop_requested or generation != self._generation

    def _begin(self, item: BatchItem, index: int) -> None:
        item.status = BatchStatus.PROCESSING
        logger.info("batch_item_started", batch_item=item.id, item_index=index, name=item.name)
        self._notify_item(item)

    def _complete(self, item: BatchItem, result: ScanResult) -> None:
        item.status = BatchStatus.COMPLETE
        item.breakdown = result.breakdown
        item.output_raster = result.raster
        logger.info(
            "batch_item_completed",
            batch_item=item.id,
            detected=result.breakdown.total,
            boxes=len(result.items),
        )
        self._notify_item(item)

    def _fail(self, item: BatchItem, exc: Exception) -> None:
        item.status = BatchStatus.ERROR
        item.error = str(exc) or type(exc).__name__
        logger.exception("batch_item_failed", batch_item=item.id, error=item.error)
        self._notify_item(item)

    def _advance(self, generation: int, current: int, total: int) -> None:
        if generation != self._generation:
            return
        self._set_progress(BatchProgress(current=current, total=total, is_processing=True))

    def _finish_run(self, generation: int) -> None:
        self._running = False
        self._stop_requested = False
        if generation != self._generation:
            return
        done = self._progress
        self._set_progress(BatchProgress(current=done.current, total=done.total, is_processing=False))
        logger.info("batch_finished", current=done.current, total=done.total)

    def _notify_item(self, item: BatchItem) -> None:
        if not self.on_item:
            return
        try:
            self.on_item(item.snapshot())
        except Exception:
            # A broken observer must not abort the run
            logger.exception("item_observer_failed", batch_item=item.id)

    def _set_progress(self, progress: BatchProgress) -> None:
        self._progress = progress
        if not self.on_progress:
            return
        try:
            self.on_progress(progress)
        except Exception:
            logger.exception("progress_observer_failed", current=progress.current)
