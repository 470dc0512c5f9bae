# imageblur - Processing job
"""
End-to-end processing of one image file: load, blur, darken and save.

The job reports human readable progress through a reporter callable, so a
caller can forward it to a progress bar, a notification or a console.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .codec import load
from .pipeline import BlurPipeline, PipelineConfig, Stage
from .storage import OutputWriter

logger = logging.getLogger(__name__)

ProgressReporter = Callable[[str], None]

STATUS_LOADING = "Loading image..."
STATUS_SAVING = "Saving..."


@dataclass
class JobResult:
    """Outcome of a successful job."""

    source: Path
    output_path: Path
    width: int
    height: int
    timings: dict[str, float] = field(default_factory=dict)  # step -> seconds

    @property
    def total_time(self) -> float:
        return sum(self.timings.values())


class ProcessJob:
    """Processes a single image file.

    Errors are not handled here: a missing file raises FileNotFoundError,
    undecodable data an ImageDecodeError, and everything else propagates
    unchanged to the caller.
    """

    def __init__(
        self,
        source: str | Path,
        output_dir: str | Path | None = None,
        config: PipelineConfig | None = None,
        reporter: ProgressReporter | None = None,
    ):
        """
        :param source: Path of the image to process
        :param output_dir: Target directory, the source's directory by default
        :param config: Pipeline configuration, the process-wide defaults if omitted
        :param reporter: Optional callable receiving status strings
        """
        self.source = Path(source)
        self.output_dir = Path(output_dir) if output_dir is not None else self.source.parent
        self.config = config
        self.reporter = reporter
        self._last_status: str | None = None

    def _report(self, status: str) -> None:
        if status == self._last_status:
            return
        self._last_status = status
        logger.debug("progress: %s", status)
        if self.reporter is not None:
            self.reporter(status)

    def _on_stage(self, stage: Stage) -> None:
        self._report(stage.status)

    def run(self) -> JobResult:
        """
        Runs the job

        :return: The job's result including the written path and timings
        """
        logger.info("processing %s", self.source)
        self._last_status = None
        timings: dict[str, float] = {}
        pipeline = BlurPipeline(self.config, listener=self._on_stage)

        self._report(STATUS_LOADING)
        start = time.perf_counter()
        original = load(self.source)
        timings["decode"] = time.perf_counter() - start
        logger.debug("decoded %dx%d in %.1fms", original.width, original.height, timings["decode"] * 1000)

        start = time.perf_counter()
        blurred = pipeline.blur(original)
        timings["blur"] = time.perf_counter() - start

        start = time.perf_counter()
        processed = pipeline.darken(blurred)
        timings["darken"] = time.perf_counter() - start

        self._report(STATUS_SAVING)
        start = time.perf_counter()
        output_path = OutputWriter(self.output_dir).save(processed, self.source.name)
        timings["save"] = time.perf_counter() - start

        result = JobResult(
            source=self.source,
            output_path=output_path,
            width=processed.width,
            height=processed.height,
            timings=timings,
        )
        logger.info(
            "saved %s in %.1fms (decode=%.1fms, blur=%.1fms, darken=%.1fms, save=%.1fms)",
            output_path, result.total_time * 1000,
            timings["decode"] * 1000, timings["blur"] * 1000,
            timings["darken"] * 1000, timings["save"] * 1000,
        )
        return result
