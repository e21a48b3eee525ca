"""
Per-file repair pipeline.

Each file goes through backup -> read -> convert -> save. Every stage
returns a Result; the first failing stage ends processing of that file
only, and the error is kept on the file's report.
"""

import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, List, Optional, TypeVar

from mutagen.mp3 import MP3

from .encoding import has_win1252, win1252_to_cyrillic
from .exceptions import BackupError, TagFixException
from .tags import FIELD_KEYS, get_first, read_mp3, save_mp3, set_field
from .utils.config import ProcessingConfig, RunConfig
from .utils.logger import get_logger

logger = get_logger("handler")

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one pipeline stage: either a value or an error."""

    value: Optional[T] = None
    error: Optional[TagFixException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TagFixException) -> "Result[T]":
        return cls(error=error)


@dataclass(frozen=True)
class FieldChange:
    key: str
    original: str
    converted: str


@dataclass
class FileReport:
    path: Path
    changes: List[FieldChange] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    saved: bool = False
    error: Optional[TagFixException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def changed(self) -> int:
        return len(self.changes)


@dataclass
class BatchReport:
    files: List[FileReport] = field(default_factory=list)

    @property
    def changed(self) -> int:
        return sum(1 for report in self.files if not report.failed and report.changed)

    @property
    def skipped(self) -> int:
        return sum(1 for report in self.files if not report.failed and not report.changed)

    @property
    def failed(self) -> int:
        return sum(1 for report in self.files if report.failed)


class FileHandler:
    def __init__(
        self,
        run_config: RunConfig,
        processing: Optional[ProcessingConfig] = None,
        converter: Callable[[str], str] = win1252_to_cyrillic,
        predicate: Callable[[Optional[str]], bool] = has_win1252,
    ):
        self.config = run_config
        self.processing = processing or ProcessingConfig()
        self.converter = converter
        self.predicate = predicate

    def handle(self) -> BatchReport:
        target = self.config.file
        if target.is_file():
            return BatchReport(files=[self.process(target)])

        files = self.find_files(target)
        logger.info(f"Found {len(files)} file(s) under [{target}]")
        with ThreadPoolExecutor(max_workers=self.processing.max_workers) as executor:
            reports = list(executor.map(self.process, files))
        return BatchReport(files=reports)

    def find_files(self, root: Path) -> List[Path]:
        suffixes = {f".{ext}" for ext in self.processing.extensions}
        return sorted(
            path for path in root.rglob("*")
            if path.is_file() and path.suffix.lower() in suffixes
        )

    def backup_path(self, path: Path) -> Path:
        return path.with_name(path.name + self.processing.backup_suffix)

    def process(self, path: Path) -> FileReport:
        report = FileReport(path=path)
        try:
            result = self.run_stages(path, report)
        except Exception as e:
            logger.exception(f"Unexpected error processing [{path}]")
            report.error = TagFixException(f"Unexpected error processing [{path}]: {e}", code="unexpected")
            return report

        if not result.ok:
            logger.error(str(result.error))
            report.error = result.error
        return report

    def run_stages(self, path: Path, report: FileReport) -> Result:
        result = self.backup(path)
        if result.ok:
            result = self.read(path)
        if result.ok:
            mp3 = result.value
            result = self.convert(mp3, report)
        if result.ok and report.changes:
            result = self.save(mp3)
            report.saved = result.ok and not self.config.dry_run
        return result

    def backup(self, path: Path) -> Result[Path]:
        if not self.config.need_backup:
            logger.debug(f"No backup needed for [{path}]")
            return Result.success(path)

        backup = self.backup_path(path)
        try:
            shutil.copy2(path, backup)
        except OSError as e:
            return Result.failure(BackupError(f"Unable to backup file [{path}]: {e}"))
        logger.debug(f"File [{path}] saved to [{backup}]")
        return Result.success(path)

    def read(self, path: Path) -> Result[MP3]:
        try:
            return Result.success(read_mp3(path))
        except TagFixException as e:
            return Result.failure(e)

    def convert(self, mp3: MP3, report: Optional[FileReport] = None) -> Result[FileReport]:
        if report is None:
            report = FileReport(path=Path(mp3.filename))
        tags = mp3.tags

        for key in FIELD_KEYS:
            original = get_first(tags, key)
            if not self.predicate(original):
                continue

            converted = self.converter(original)
            try:
                set_field(tags, key, converted)
            except TagFixException as e:
                logger.error(f"{report.path}: {e}")
                report.rejected.append(key)
                continue

            report.changes.append(FieldChange(key, original, converted))
            logger.debug(f"File: [{report.path}] Field: [{key}] Value: [{original}] Set: [{converted}]")

        if report.changes:
            logger.info(f"[{report.path}] processed, [{report.changed}] fields changed")
        else:
            logger.info(f"[{report.path}] no win1252, skipped")
        return Result.success(report)

    def save(self, mp3: MP3) -> Result[MP3]:
        if self.config.dry_run:
            logger.debug(f"Dry run, [{mp3.filename}] left untouched")
            return Result.success(mp3)
        try:
            save_mp3(mp3)
        except TagFixException as e:
            return Result.failure(e)
        logger.debug(f"Mp3 saved [{mp3.filename}]")
        return Result.success(mp3)
