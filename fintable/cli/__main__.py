from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from fintable.config.loader import DEFAULT_CONFIG_PATH, ConfigError, apply_env_overrides, load_config
from fintable.io.reader import InputFormatError, read_input_table
from fintable.logging.init import log_summary, set_debug, setup_logging
from fintable.services.errors import PivotError
from fintable.services.layout_resolver import query_columns, resolve_layout
from fintable.services.orchestrator import ProcessingError, process_all, scan_input_files
from fintable.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env (python-dotenv, overrides the process environment)
- load + validate config (default config/summary.yml)
- summarize every input file of source_directory into output_directory
- print the SUMMARY line, exit with the contract code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="fintable", description="Period summary tables with subtotals and cumulative columns")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config YAML path (default: %(default)s)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print bound columns, resolved layout & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    files = scan_input_files(Path(cfg.source_directory))
    if not files:
        print("inspect: no input files")
        return EXIT_SUCCESS_ALL
    columns = query_columns(cfg.slots)
    print(f"bound columns: {columns}")
    for f in files:
        print(f"FILE: {f.name}")
        try:
            table = read_input_table(f, columns=columns, header_row=cfg.header_row)
            print(f"  header={table.columns} rows={len(table.rows)}")
            if table.rows:
                layout = resolve_layout(cfg.slots, table.rows[0], language=cfg.language)
                print(
                    f"  layout: order={layout.has_order} levels={layout.category_levels} "
                    f"measures={list(layout.output_measures)}"
                )
            for row in table.rows[:3]:
                print("    ", [v.isoformat() if hasattr(v, "isoformat") else v for v in row])
        except (InputFormatError, PivotError, OSError, ValueError) as e:
            print(f"  error: {e}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストの cli_main([]) で pytest 引数を拾わない)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=True)

    try:
        cfg = apply_env_overrides(load_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        try:
            return _inspect_data(cfg)
        except ProcessingError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # render_summary_line returns "SUMMARY ..."; log_summary adds the label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
