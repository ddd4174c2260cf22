from pathlib import Path
import argparse
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pipeline import config
from pipeline.errors import SplitError
from pipeline.logging_utils import setup_logging
from pipeline.split_config import SplitConfig, minutes_to_seconds
from pipeline.split_session import split_file


def _positive_minutes(value: str) -> float:
    try:
        minutes = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid chunk length: {value!r}")
    if minutes <= 0:
        raise argparse.ArgumentTypeError("chunk length must be greater than zero")
    return minutes


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Split a compressed audio file into chunks without re-encoding",
    )
    parser.add_argument("input_file", nargs="?", help="Path to the input audio file")
    parser.add_argument("chunk_minutes", nargs="?", type=_positive_minutes, help="Target chunk length in minutes")
    parser.add_argument("output_prefix", nargs="?", help="Filename prefix for the chunks")
    parser.add_argument("--output-dir", default=config.DEFAULT_OUTPUT_DIR, help="Directory for the chunk files")
    parser.add_argument("--format", dest="format_hint", default=None, help="Force the container format (e.g. mp3)")
    parser.add_argument("--workers", type=int, default=config.WRITE_WORKERS, help="Chunks written in parallel")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, force=args.log_level is not None)

    if args.input_file is None:
        print("Using default parameters:")
        print(f"  Input file: {config.DEFAULT_INPUT_FILE}")
        print(f"  Chunk duration: {config.DEFAULT_CHUNK_MINUTES:g} minutes")
        print(f"  Output prefix: {config.DEFAULT_PREFIX}")
        print(f"  Output folder: {args.output_dir}")
        print()
        print("To specify custom parameters, use: run_split.py <input_file> <chunk_minutes> <output_prefix>")

    try:
        split_config = SplitConfig(
            input_path=Path(args.input_file or config.DEFAULT_INPUT_FILE),
            chunk_seconds=minutes_to_seconds(args.chunk_minutes or config.DEFAULT_CHUNK_MINUTES),
            output_dir=Path(args.output_dir),
            prefix=args.output_prefix or config.DEFAULT_PREFIX,
            format_hint=args.format_hint,
            workers=args.workers,
            show_progress=not args.no_progress,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        result = split_file(split_config)
    except SplitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in result.tag_warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    print(f"Split into {result.chunk_count} chunks ({result.total_duration:.2f} seconds) in {split_config.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
