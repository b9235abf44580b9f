"""Mirror a source tree into an output tree, one oracle call per file."""

from __future__ import annotations

import logging
import os
import re
import threading

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from intellicompiler.configuration import TraversalSettings
from intellicompiler.exceptions import DirectoryTranspileError
from intellicompiler.oracle import RefinementOracle
from intellicompiler.prompting import OraclePrompts

LOGGER = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"\A```[\w+#.-]*[ \t]*\n(.*?)\n?```\s*\Z", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Drop a single markdown fence wrapped around the whole response."""

    match = _FENCED_BLOCK.match(text.strip())
    if match is None:
        return text
    return match.group(1) + "\n"


@dataclass(frozen=True)
class TranspileFailure:
    path: Path
    stage: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": str(self.path), "stage": self.stage, "error": self.error}


@dataclass
class TranspileSummary:
    """What a walk did with every entry it saw. Safe to update from workers."""

    source_dir: Path
    output_dir: Path
    language: str
    converted: List[Tuple[Path, Path]] = field(default_factory=list)
    ignored: List[Path] = field(default_factory=list)
    skipped_dirs: List[Path] = field(default_factory=list)
    failures: List[TranspileFailure] = field(default_factory=list)
    cancelled: bool = False

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def ok(self) -> bool:
        return not self.failures and not self.cancelled

    def record_converted(self, source: Path, destination: Path) -> None:
        with self._lock:
            self.converted.append((source, destination))

    def record_ignored(self, path: Path) -> None:
        with self._lock:
            self.ignored.append(path)

    def record_skipped_dir(self, path: Path) -> None:
        with self._lock:
            self.skipped_dirs.append(path)

    def record_failure(self, path: Path, stage: str, error: Any) -> None:
        if isinstance(error, BaseException):
            error = f"{type(error).__name__}: {error}"
        with self._lock:
            self.failures.append(TranspileFailure(path, stage, str(error)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_dir": str(self.source_dir),
            "output_dir": str(self.output_dir),
            "language": self.language,
            "converted": [
                {"source": str(src), "output": str(dst)}
                for src, dst in sorted(self.converted)
            ],
            "ignored": sorted(str(path) for path in self.ignored),
            "skipped_dirs": sorted(str(path) for path in self.skipped_dirs),
            "failures": [failure.to_dict() for failure in self.failures],
            "cancelled": self.cancelled,
        }


class DirectoryTranspiler:
    """Depth-first walk that replaces each convertible file with the oracle's
    full-file transpilation.

    Output directories are created by the walking thread before any file
    beneath them is submitted to the worker pool. Every per-entry problem is
    logged and recorded in the summary; only an unusable source root or an
    uncreatable output root aborts the walk. An output directory nested in
    the source tree is treated as a skipped directory.
    """

    def __init__(
        self,
        oracle: RefinementOracle,
        settings: Optional[TraversalSettings] = None,
        *,
        prompts: Optional[OraclePrompts] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._oracle = oracle
        self._settings = settings or TraversalSettings()
        self._prompts = prompts or OraclePrompts()
        self._cancel_event = cancel_event or threading.Event()

    @property
    def settings(self) -> TraversalSettings:
        return self._settings

    def cancel(self) -> None:
        """Stop scheduling new files; in-flight files still finish."""

        self._cancel_event.set()

    def output_name(self, source: Path, language: str) -> str:
        return f"{source.name}.{self._settings.output_extension(language)}"

    def transpile(
        self, source_dir: Path, output_dir: Path, language: str
    ) -> TranspileSummary:
        source_dir = Path(source_dir)
        output_dir = Path(output_dir)
        if not source_dir.is_dir():
            raise DirectoryTranspileError(
                f"Source directory {source_dir} does not exist"
            )
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryTranspileError(
                f"Cannot create output directory {output_dir}: {exc}"
            ) from exc

        summary = TranspileSummary(source_dir, output_dir, language)
        output_root = output_dir.resolve()
        LOGGER.info(
            "Transpiling %s -> %s as %s (workers=%d)",
            source_dir,
            output_dir,
            language,
            self._settings.workers,
        )
        futures: List[Future] = []
        with ThreadPoolExecutor(max_workers=self._settings.workers) as executor:
            self._walk(
                source_dir, output_dir, language, summary, executor, futures,
                output_root=output_root,
            )
            for future in futures:
                future.result()
        LOGGER.info(
            "Transpiled %d file(s), ignored %d, skipped %d dir(s), %d failure(s)",
            len(summary.converted),
            len(summary.ignored),
            len(summary.skipped_dirs),
            len(summary.failures),
        )
        return summary

    def _walk(
        self,
        source: Path,
        output: Path,
        language: str,
        summary: TranspileSummary,
        executor: ThreadPoolExecutor,
        futures: List[Future],
        *,
        output_root: Path,
    ) -> None:
        try:
            entries = sorted(source.iterdir(), key=lambda path: path.name)
        except OSError as exc:
            LOGGER.error("Cannot list %s: %s", source, exc)
            summary.record_failure(source, "list", exc)
            return

        for entry in entries:
            if self._cancel_event.is_set():
                summary.cancelled = True
                return
            if entry.is_dir() and not entry.is_symlink():
                if (
                    entry.name in self._settings.skip_dirs
                    or entry.resolve() == output_root
                ):
                    LOGGER.debug("Skipping directory %s", entry)
                    summary.record_skipped_dir(entry)
                    continue
                target = output / entry.name
                try:
                    target.mkdir(exist_ok=True)
                except OSError as exc:
                    LOGGER.error("Cannot create %s: %s", target, exc)
                    summary.record_failure(entry, "mkdir", exc)
                    continue
                self._walk(
                    entry, target, language, summary, executor, futures,
                    output_root=output_root,
                )
            elif entry.is_file() and self._settings.is_convertible(entry):
                destination = output / self.output_name(entry, language)
                futures.append(
                    executor.submit(
                        self._convert_file, entry, destination, language, summary
                    )
                )
            else:
                LOGGER.debug("Ignoring %s", entry)
                summary.record_ignored(entry)

    def _convert_file(
        self,
        source: Path,
        destination: Path,
        language: str,
        summary: TranspileSummary,
    ) -> None:
        # queued files that had not started when cancel() was called
        if self._cancel_event.is_set():
            summary.cancelled = True
            return
        try:
            content = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Cannot read %s: %s", source, exc)
            summary.record_failure(source, "read", exc)
            return

        try:
            result = self._oracle.predict(
                self._prompts.transpile_file(language, source.name, content)
            )
        except Exception as exc:
            LOGGER.exception("Oracle raised for %s", source)
            summary.record_failure(source, "oracle", exc)
            return
        if not result.ok:
            LOGGER.error("Oracle failed for %s: %s", source, result.error)
            summary.record_failure(source, "oracle", result.error)
            return

        partial = destination.with_name(destination.name + ".part")
        try:
            partial.write_text(strip_code_fences(result.text), encoding="utf-8")
            os.replace(partial, destination)
        except OSError as exc:
            LOGGER.error("Cannot write %s: %s", destination, exc)
            summary.record_failure(source, "write", exc)
            partial.unlink(missing_ok=True)
            return
        LOGGER.info("Transpiled %s -> %s", source, destination)
        summary.record_converted(source, destination)


__all__ = [
    "DirectoryTranspiler",
    "TranspileFailure",
    "TranspileSummary",
    "strip_code_fences",
]
