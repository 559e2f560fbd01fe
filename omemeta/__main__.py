# omemeta/__main__.py
import argparse
import logging
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from omemeta.core.errors import MetadataError
from omemeta.core.validator import ImageState, classify, correct_image
from omemeta.metadata.loader import (
    apply_metadata,
    create_metadata,
    parse_document,
    write_document,
)
from omemeta.utils.logging_config import setup_logging


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="omemeta",
        description="Check and correct the channel metadata of OME-XML files",
    )

    parser.add_argument("inputs", nargs="+", help="Path(s) to OME-XML files")
    parser.add_argument(
        "--correct",
        action="store_true",
        help="Repair inconsistent SizeC / channel / SamplesPerPixel metadata",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the corrected document here (single input with --correct)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the per-image progress bar",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level",
    )
    parser.add_argument("--log-file", default=None, help="Path to the log file")

    return parser


def _validate_arguments(parser: argparse.ArgumentParser, args) -> None:
    """Validate command line arguments."""
    for path in args.inputs:
        if not Path(path).is_file():
            parser.error(f"Input file does not exist: {path}")

    if args.output is not None:
        if not args.correct:
            parser.error("--output requires --correct")
        if len(args.inputs) != 1:
            parser.error("--output can only be used with a single input file")
        if Path(args.output).exists():
            parser.error(f"Output path already exists: {args.output}")


def _process_file(path: Path, args) -> bool:
    """Check or correct one file; return True if every image ends up valid."""
    document = parse_document(path)
    model = create_metadata(document)
    print(f"{path}: {model.image_count} image(s), schema {model.version or 'unknown'}")

    results: List[str] = []
    all_valid = True
    for image in tqdm(
        model,
        total=model.image_count,
        desc=path.name,
        unit="image",
        disable=args.no_progress,
    ):
        if args.correct:
            outcome = correct_image(image)
            all_valid = all_valid and outcome.is_valid
            detail = "; ".join(outcome.changes) or outcome.reason or ""
            status = outcome.status.value
        else:
            state = classify(image)
            all_valid = all_valid and state is ImageState.VALID
            detail = ""
            status = state.value
        line = f"  Image #{image.index} ({image.id}): {status}"
        results.append(f"{line} - {detail}" if detail else line)

    for line in results:
        print(line)

    if args.output is not None:
        apply_metadata(document, model)
        write_document(document, args.output)
        print(f"Corrected metadata written to {args.output}")

    return all_valid


def main() -> None:
    """Main entry point for the CLI."""
    parser = _create_argument_parser()
    args = parser.parse_args()

    _validate_arguments(parser, args)

    setup_logging(log_level=args.log_level, log_file=args.log_file)

    success = True
    for input_path in args.inputs:
        try:
            success = _process_file(Path(input_path), args) and success
        except MetadataError as e:
            logging.getLogger("omemeta").error(f"{input_path}: {e}")
            success = False

    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
