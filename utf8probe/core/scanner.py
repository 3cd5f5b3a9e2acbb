"""Line-by-line scanning of a byte source."""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional

from .config import ScanConfig
from .scanlog import ScanLog
from .validator import SequenceValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineVerdict:
    """Verdict for one line read from the source."""

    lineno: int
    length: int
    ok: bool
    reported_ok: bool


@dataclass
class ScanSummary:
    """Aggregate outcome of a scan."""

    source: str
    lines: int = 0
    failed: int = 0
    first_failure: Optional[int] = None
    stopped_early: bool = False
    elapsed: float = 0.0
    verdicts: List[LineVerdict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class LineScanner:
    """Feed each line of a source to the validator and aggregate the results."""

    def __init__(self, config: Optional[ScanConfig] = None, scan_log: Optional[ScanLog] = None) -> None:
        self.config = config or ScanConfig()
        self.scan_log = scan_log or ScanLog()
        self.validator = SequenceValidator(reject_nul=self.config.reject_nul)

    def check_line(self, line: bytes) -> bool:
        """Validate one line, split into fixed-size buffers when configured.

        Each buffer is validated on its own and the line verdict is the AND of
        the buffer verdicts, so a form straddling a buffer boundary fails.
        """
        size = self.config.buffer_size
        if size is None:
            return self.validator.validate(line, len(line))
        step = size - 1
        view = memoryview(line)
        for start in range(0, len(line), step):
            chunk = view[start:start + step]
            if not self.validator.validate(chunk, len(chunk)):
                return False
        return True

    def iter_verdicts(self, handle: BinaryIO) -> Iterator[LineVerdict]:
        running = True
        for lineno, line in enumerate(handle, start=1):
            ok = self.check_line(line)
            if self.config.cumulative:
                running = running and ok
                reported = running
            else:
                reported = ok
            yield LineVerdict(lineno=lineno, length=len(line), ok=ok, reported_ok=reported)

    def scan_stream(self, handle: BinaryIO, source: str = "<stream>") -> ScanSummary:
        summary = ScanSummary(source=source)
        self.scan_log.log(f"start scan {source}")
        logger.debug("scanning %s with %s", source, self.config)
        started = time.perf_counter()

        for verdict in self.iter_verdicts(handle):
            summary.lines += 1
            summary.verdicts.append(verdict)
            if verdict.ok:
                continue
            summary.failed += 1
            if summary.first_failure is None:
                summary.first_failure = verdict.lineno
                self.scan_log.log(f"first invalid line {verdict.lineno}")
                logger.info("%s: line %d is not well formed", source, verdict.lineno)
            if self.config.stop_on_failure:
                summary.stopped_early = True
                break

        summary.elapsed = time.perf_counter() - started
        self.scan_log.log(
            f"end scan {source} lines={summary.lines} failed={summary.failed} "
            f"stopped_early={summary.stopped_early}"
        )
        return summary

    def scan_path(self, path: Path) -> ScanSummary:
        with path.open("rb") as handle:
            return self.scan_stream(handle, source=str(path))

    def scan_bytes(self, data: bytes, source: str = "<bytes>") -> ScanSummary:
        return self.scan_stream(io.BytesIO(data), source=source)
