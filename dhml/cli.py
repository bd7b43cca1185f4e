# -*- coding: utf-8 -*-
"""
DHML Command Line - Run DHML processors on TIFF stacks.

Sub-commands
------------
fringe-visibility
    Per-pixel fringe visibility of every plane of a hologram stack.
double-wavelength
    Double-wavelength phase unwrapping of two phase stacks; writes the
    coarse and fine maps (or all seven stages with ``--debug``).

Usage:
  dhml fringe-visibility hologram.tif -o visibility.tif
  dhml double-wavelength phase_633.tif 633 phase_532.tif 532 -o maps/
  dhml double-wavelength p1.tif 633 p2.tif 532 -o maps/ --debug --npz
  dhml --help

Option help text comes from each processor's ``Desc`` annotations.

Author
------
DHML contributors

License
-------
MIT License
Copyright (c) 2026 DHML contributors
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# DHML
from dhml.exceptions import DhmlError
from dhml.image_processing import FringeVisibility
from dhml.IO import (
    HyperstackReader,
    HyperstackWriter,
    NumpyWriter,
    StackMetadata,
    label_to_stem,
)
from dhml.phase_unwrapping import DoubleWavelengthCommand

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2


def _param_help(processor_cls: type, name: str) -> str:
    """Help text for option *name* from the processor's ``Desc`` marker."""
    for spec in processor_cls.__param_specs__:
        if spec.name == name:
            if spec.required:
                return spec.description
            return f"{spec.description} (default: {spec.default})"
    raise KeyError(name)


# ── CLI ──────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """Build the ``dhml`` argument parser.

    Returns
    -------
    argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='dhml',
        description="Digital holographic microscopy analysis tools.",
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    sub = parser.add_subparsers(dest='command', required=True)

    fv = sub.add_parser(
        'fringe-visibility',
        help="Compute per-pixel fringe visibility of a hologram stack.",
    )
    fv.add_argument('input', type=Path, help="Hologram TIFF (plane or stack).")
    fv.add_argument('-o', '--output', type=Path, required=True,
                    help="Output TIFF path.")
    fv.add_argument('--radius', type=int,
                    default=FringeVisibility.radius,
                    help=_param_help(FringeVisibility, 'radius'))
    fv.set_defaults(handler=run_fringe_visibility)

    dw = sub.add_parser(
        'double-wavelength',
        help="Double-wavelength phase unwrapping of two phase stacks.",
    )
    dw.add_argument('phase1', type=Path, help="Phase TIFF at wavelength 1.")
    dw.add_argument('wavelength1', type=float,
                    help=_param_help(DoubleWavelengthCommand, 'wavelength1'))
    dw.add_argument('phase2', type=Path, help="Phase TIFF at wavelength 2.")
    dw.add_argument('wavelength2', type=float,
                    help=_param_help(DoubleWavelengthCommand, 'wavelength2'))
    dw.add_argument('-o', '--output-dir', type=Path, required=True,
                    help="Directory for the output maps (created if missing).")
    dw.add_argument('--phase-value', type=float,
                    default=DoubleWavelengthCommand.phase_value,
                    help=_param_help(DoubleWavelengthCommand, 'phase_value'))
    dw.add_argument('--debug', action='store_true',
                    help=_param_help(DoubleWavelengthCommand, 'debug'))
    dw.add_argument('--npz', action='store_true',
                    help="Write one .npz archive instead of one TIFF per map.")
    dw.set_defaults(handler=run_double_wavelength)

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def _progress_logger(label: str):
    def report(fraction: float) -> None:
        logger.info("%s: %.0f%%", label, fraction * 100)
    return report


# ── Commands ─────────────────────────────────────────────────────────


def run_fringe_visibility(args: argparse.Namespace) -> None:
    """Read a hologram stack, compute visibility, write a TIFF."""
    with HyperstackReader(args.input) as reader:
        source_meta = reader.metadata
        stack = reader.read_full()
    t_size, z_size, rows, cols = stack.shape
    logger.info("Fringe visibility of %s (%d planes of %d x %d)",
                args.input, source_meta.planes, rows, cols)

    visibility = FringeVisibility(radius=args.radius).apply(
        stack.reshape(source_meta.planes, rows, cols),
        progress_callback=_progress_logger('Fringe visibility'),
    )

    meta = StackMetadata(
        format='ImageJ TIFF', rows=rows, cols=cols, dtype='float32',
        frames=t_size, slices=z_size,
        extras={'source': str(args.input), 'radius': args.radius},
    )
    with HyperstackWriter(args.output, metadata=meta) as writer:
        writer.write(visibility.reshape(t_size, z_size, rows, cols))
    logger.info("Wrote %s", args.output)


def run_double_wavelength(args: argparse.Namespace) -> Dict[str, Path]:
    """Unwrap two phase stacks and write the labelled output maps.

    Returns
    -------
    Dict[str, Path]
        Output label to written file.
    """
    with HyperstackReader(args.phase1) as reader:
        stack1 = reader.read_full()
    with HyperstackReader(args.phase2) as reader:
        stack2 = reader.read_full()

    command = DoubleWavelengthCommand(
        wavelength1=args.wavelength1,
        wavelength2=args.wavelength2,
        phase_value=args.phase_value,
        debug=args.debug,
    )
    outputs = command.run(
        stack1, stack2,
        progress_callback=_progress_logger('Double wavelength'),
    )
    logger.info("Combined wavelength: %.3f nm", command.combined_wavelength)

    t_size, z_size, rows, cols = next(iter(outputs.values())).shape
    meta = StackMetadata(
        format='ImageJ TIFF', rows=rows, cols=cols, dtype='float32',
        frames=t_size, slices=z_size,
        extras={
            'phase1': str(args.phase1),
            'phase2': str(args.phase2),
            'wavelength1': args.wavelength1,
            'wavelength2': args.wavelength2,
            'phase_value': args.phase_value,
            'combined_wavelength': command.combined_wavelength,
        },
    )

    args.output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    if args.npz:
        path = args.output_dir / 'double_wavelength.npz'
        with NumpyWriter(path, metadata=meta) as writer:
            writer.write_npz(outputs)
        written = {label: path for label in outputs}
    else:
        for label, stack in outputs.items():
            path = args.output_dir / f"{label_to_stem(label)}.tif"
            meta['label'] = label
            with HyperstackWriter(path, metadata=meta) as writer:
                writer.write(stack)
            written[label] = path

    for label, path in written.items():
        logger.info("%s -> %s", label, path)
    return written


# ── Main ─────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``dhml`` console script.

    Returns
    -------
    int
        ``0`` on success, ``2`` when a DHML or file error is reported.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        args.handler(args)
    except (DhmlError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
