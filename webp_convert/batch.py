"""
Batch driver for converting and optimizing many files.

Files are processed one at a time in the order they were resolved. A
failure on one file is logged and recorded; processing continues with the
next file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .codecs.base import ImageCodec
from .config import SVG_EXTENSIONS, ConverterConfig
from .errors import ConversionError
from .pipeline import TransformPipeline
from .svg_optimizer import SvgOptimizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one input file."""

    path: Path
    output_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Per-file outcomes of a batch run."""

    outcomes: List[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def ok(self) -> bool:
        """True when no file failed (an empty batch is ok)."""
        return not self.failed

    def summary(self) -> str:
        return (
            f"Processed {self.total} file(s): "
            f"{len(self.succeeded)} succeeded, {len(self.failed)} failed"
        )


class BatchDriver:
    """
    Runs the transform pipeline over a list of files.

    When an SVG optimizer is supplied, ``.svg`` files are optimized in place
    instead of converted.
    """

    def __init__(
        self,
        config: ConverterConfig,
        codec: ImageCodec,
        svg_optimizer: Optional[SvgOptimizer] = None,
    ):
        """
        Initialize the batch driver.

        Args:
            config: Options shared by every file
            codec: Raster codec used by the pipeline
            svg_optimizer: Optimizer for SVG files; SVGs are not handled
                when omitted
        """
        self.config = config
        self.pipeline = TransformPipeline(config, codec)
        self.svg_optimizer = svg_optimizer

    def _handler_for(self, path: Path) -> Callable[[Path], Path]:
        if self.svg_optimizer is not None and path.suffix.lower() in SVG_EXTENSIONS:
            return self.svg_optimizer.optimize_svg_file
        return self.pipeline.process_file

    def process(self, path: Path) -> FileOutcome:
        """
        Process a single file, converting any failure into an outcome.

        Args:
            path: Input file

        Returns:
            FileOutcome with either the output path or the failure reason
        """
        handler = self._handler_for(path)
        try:
            output_path = handler(path)
        except (ConversionError, OSError) as exc:
            logger.warning("Failed to process %s: %s", path, exc)
            return FileOutcome(path=path, error=str(exc))
        except Exception as exc:  # pragma: no cover - best-effort batch process
            logger.exception("Unexpected error processing %s", path)
            return FileOutcome(path=path, error=f"{type(exc).__name__}: {exc}")
        return FileOutcome(path=path, output_path=output_path)

    def run(self, files: Iterable[Path]) -> BatchReport:
        """
        Process every file in order.

        Args:
            files: Files to process

        Returns:
            BatchReport with one outcome per file
        """
        report = BatchReport()
        for path in files:
            report.record(self.process(Path(path)))

        logger.info("%s", report.summary())
        return report
