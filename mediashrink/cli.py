import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from mediashrink.core.config import CompressionConfig
from mediashrink.core.errors import MediaError
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from mediashrink.core.media_compressor import MediaCompressor
from mediashrink.core.models import ProgressEvent
from mediashrink.core.scanner import Scanner
from mediashrink.utils.format import compression_ratio, format_size
from mediashrink.utils.logger import get_logger


# ============================================================================
# Argument Parsing
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediashrink",
        description="Compress images and videos in a file or folder into a new output directory.",
    )
    parser.add_argument("source", nargs="?", type=Path, help="File or folder to compress")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory that receives the output (default: current directory)",
    )
    parser.add_argument(
        "--keep-format",
        action="store_true",
        help="Keep each image's original format instead of converting to WebP",
    )
    parser.add_argument("--poster", action="store_true", help="Extract a WebP poster frame for every video")
    parser.add_argument("--ffmpeg-path", type=str, default=None, help="Path to the FFmpeg executable")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--check-encoder", action="store_true", help="Report whether FFmpeg is available and exit")
    parser.add_argument(
        "--scan",
        action="store_true",
        help="List the media files that would be compressed without writing anything",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "NOTICE", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-dir", type=str, default=None, help="Also write a log file to this directory")
    return parser


# ============================================================================
# Main
# ============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = get_logger()
    logger.configure(log_level=args.log_level, log_dir=args.log_dir, enable_console=not args.json)

    if args.check_encoder:
        return _check_encoder(args.ffmpeg_path, args.json)

    if args.source is None:
        parser.error("source is required unless --check-encoder is given")

    if args.scan:
        return _scan(args.source, args.json)

    config = CompressionConfig(
        output_dir=args.output_dir or Path.cwd(),
        convert_images=not args.keep_format,
        generate_poster=args.poster,
        ffmpeg_path=args.ffmpeg_path,
    )

    try:
        compressor = MediaCompressor(config)
        if args.source.is_dir():
            result = compressor.compress_tree(args.source, progress=_print_progress if not args.json else None)
        else:
            result = compressor.compress_file(args.source)
    except (MediaError, ValueError) as error:
        return _report_error(error, args.json)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    if args.source.is_dir():
        _print_batch_summary(result)
    else:
        _print_single_summary(result)
    return 0


def _check_encoder(ffmpeg_path: Optional[str], as_json: bool) -> int:
    status = FFmpegExecutor.status(ffmpeg_path)
    if as_json:
        print(json.dumps(status.to_dict(), indent=2))
    elif status.installed:
        print(f"FFmpeg found: {status.path}")
        if status.version:
            print(status.version)
    else:
        print("FFmpeg not found")
    return 0 if status.installed else 1


def _scan(source: Path, as_json: bool) -> int:
    scanner = Scanner()
    try:
        files = scanner.scan_tree(source) if source.is_dir() else [scanner.scan_one(source)]
    except MediaError as error:
        return _report_error(error, as_json)

    if as_json:
        print(json.dumps([descriptor.to_dict() for descriptor in files], indent=2))
        return 0

    for descriptor in files:
        print(f"  [{descriptor.media_type.value}] {descriptor.relative_name} ({format_size(descriptor.size)})")
    print(f"Found {len(files)} media file(s), {format_size(sum(d.size for d in files))} total")
    return 0


def _report_error(error: Exception, as_json: bool) -> int:
    get_logger().error(f"Error: {error}")
    if as_json:
        print(json.dumps({"error": str(error), "kind": getattr(getattr(error, "kind", None), "value", None)}))
    return 1


def _print_progress(event: ProgressEvent) -> None:
    print(
        f"  [{event.current}/{event.total}] {event.file}: "
        f"{format_size(event.original_size)} → {format_size(event.resulting_size)}"
    )


def _print_batch_summary(result) -> None:
    ratio = compression_ratio(result.total_original, result.total_compressed)
    print("\n" + "=" * 60)
    print("Compression Complete!")
    print("=" * 60)
    print(f"Processed: {result.file_count} files")
    print(f"Original size: {format_size(result.total_original)}")
    print(f"Compressed size: {format_size(result.total_compressed)}")
    print(f"Space saved: {format_size(result.total_original - result.total_compressed)} ({ratio:.1f}%)")
    if result.fallbacks:
        print(f"Copied without compression: {len(result.fallbacks)} file(s)")
        for outcome in result.fallbacks:
            print(f"  - {outcome.descriptor.relative_name}")
    print(f"Output: {result.output_path}")


def _print_single_summary(result) -> None:
    ratio = compression_ratio(result.original_size, result.compressed_size)
    print(
        f"Compressed: {format_size(result.original_size)} → {format_size(result.compressed_size)} "
        f"({ratio:.1f}% reduction)"
    )
    print(f"Output: {result.output_path}")
    if result.poster_path is not None:
        print(f"Poster: {result.poster_path}")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
