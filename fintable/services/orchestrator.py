from __future__ import annotations

import logging
import zipfile
from datetime import UTC, datetime
from pathlib import Path

from ..io.reader import SUPPORTED_SUFFIXES, InputFormatError, read_input_table
from ..io.writer import write_summary
from ..logging.warning_log import WarningLogBuffer
from ..models.config_models import SummaryConfig
from ..models.input_file import FileStatus, InputFile
from ..models.processing_result import FileStat, ProcessingResult
from .errors import EmptyInputError, LayoutError
from .layout_resolver import query_columns
from .options import PivotOptions
from .pipeline import build_summary_from_slots
from .progress import ProgressTracker

"""Batch orchestration.

process_all():
1. scan source_directory for input files (.xlsx / .csv, non-recursive)
2. per file: read bound columns -> build summary -> write summary table
3. collect engine warnings into the warning log (flushed once)
4. aggregate per-file stats into a ProcessingResult

A failing file never stops the run: LayoutError, InputFormatError and any
unexpected error mark the file FAILED, EmptyInputError marks it SKIPPED
("no data").
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal errors that prevent a run (e.g. unreadable source directory)."""


def scan_input_files(directory: Path) -> list[Path]:
    """List input files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(file_path: Path, config: SummaryConfig) -> Path:
    return Path(config.output_directory) / f"{file_path.stem}_summary.{config.output_format}"


def process_file(
    file_path: Path,
    config: SummaryConfig,
    options: PivotOptions,
    warning_log: WarningLogBuffer,
) -> InputFile:
    start_time = datetime.now(UTC)
    input_rows = 0
    try:
        table = read_input_table(
            file_path, columns=query_columns(config.slots), header_row=config.header_row
        )
        input_rows = len(table.rows)
        result = build_summary_from_slots(table.rows, config.slots, options)
        output_path = write_summary(result, output_path_for(file_path, config))
    except EmptyInputError as e:
        logger.warning(f"{file_path.name}: {e} (skipped)")
        return InputFile(
            path=file_path,
            name=file_path.name,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.SKIPPED,
            error=str(e),
        )
    except (LayoutError, InputFormatError) as e:
        logger.error(f"{file_path.name}: {e}")
        return InputFile(
            path=file_path,
            name=file_path.name,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.FAILED,
            input_rows=input_rows,
            error=str(e),
        )
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        # 読み込み / 書き出し失敗 (壊れたファイル等)
        logger.error(f"{file_path.name}: {type(e).__name__}: {e}")
        return InputFile(
            path=file_path,
            name=file_path.name,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.FAILED,
            input_rows=input_rows,
            error=f"{type(e).__name__}: {e}",
        )
    except Exception as e:
        # 想定外のエンジン例外もファイル単位の失敗として扱い、後続ファイルは継続
        logger.error(f"{file_path.name}: unexpected {type(e).__name__}: {e}")
        return InputFile(
            path=file_path,
            name=file_path.name,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.FAILED,
            input_rows=input_rows,
            error=f"{type(e).__name__}: {e}",
        )

    warning_count = warning_log.extend_from(file_path.name, result.warnings)
    if warning_count:
        logger.warning(f"{file_path.name}: {warning_count} warning(s) recorded")
    logger.info(f"{file_path.name}: {input_rows} rows -> {len(result.records)} records ({output_path})")
    return InputFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        input_rows=input_rows,
        output_records=len(result.records),
        warnings=warning_count,
        output_path=output_path,
    )


def process_all(
    config: SummaryConfig,
    options: PivotOptions | None = None,
    warning_log: WarningLogBuffer | None = None,
) -> ProcessingResult:
    """Summarize every input file in the configured directory.

    Raises:
        ProcessingError: for fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    options = options or PivotOptions.from_config(config)
    warning_log = warning_log if warning_log is not None else WarningLogBuffer()

    file_paths = scan_input_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = failed_count = skipped_count = 0
    total_rows = total_records = total_warnings = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start(file_path.name)
            file_result = process_file(file_path, config, options, warning_log)

            if file_result.status == FileStatus.SUCCESS:
                success_count += 1
                total_rows += file_result.input_rows
                total_records += file_result.output_records
                total_warnings += file_result.warnings
            elif file_result.status == FileStatus.SKIPPED:
                skipped_count += 1
            else:
                failed_count += 1

            progress.advance(success=success_count, failed=failed_count, rows=total_rows)

            elapsed = 0.0
            if file_result.start_time and file_result.end_time:
                elapsed = (file_result.end_time - file_result.start_time).total_seconds()
            file_stats.append(FileStat(
                file_name=file_path.name,
                status=file_result.status.value,
                input_rows=file_result.input_rows,
                output_records=file_result.output_records,
                warnings=file_result.warnings,
                elapsed_seconds=elapsed,
                output_path=str(file_result.output_path) if file_result.output_path else None,
            ))

    try:
        log_path = warning_log.flush()
    except OSError as e:
        logger.warning(f"failed to write warning log: {e}")
    else:
        if log_path is not None:
            logger.info(f"warnings written to {log_path}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        skipped_files=skipped_count,
        total_input_rows=total_rows,
        total_output_records=total_records,
        total_warnings=total_warnings,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
    )
