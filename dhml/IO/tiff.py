# -*- coding: utf-8 -*-
"""
TIFF Hyperstacks - Read and write ImageJ-style TIFF hyperstacks.

Phase and hologram stacks from DHM acquisitions are usually exchanged as
ImageJ hyperstacks (axes ``TZCYX``) or as plain multi-page TIFFs. Readers
normalise every layout to ``(T, Z, rows, cols)`` float32 arrays of a
single channel; plain multi-page files are treated as z-stacks. Writers
produce float32 ImageJ hyperstacks with axes ``TZYX`` so results open as
hyperstacks in ImageJ/Fiji.

Dependencies
------------
tifffile

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
import json
import logging
from pathlib import Path
from typing import Dict, Tuple, Union

# Third-party
import numpy as np
import tifffile

# DHML internal
from dhml.exceptions import ValidationError
from dhml.IO.base import ImageReader, ImageWriter
from dhml.IO.models import StackMetadata

logger = logging.getLogger(__name__)

HYPERSTACK_AXES = 'TZCYX'


def _canonical_axes(axes: str) -> Tuple[str, bool]:
    """Map tifffile axis codes onto ``TZCYX`` letters.

    Page-sequence axes (``I``, ``Q``) become ``Z``. RGB samples (``S``)
    become channels unless a channel axis already exists, in which case
    only the first sample is kept.

    Returns
    -------
    Tuple[str, bool]
        Canonical axis string and whether the ``S`` axis must be dropped.

    Raises
    ------
    ValidationError
        If the layout has axes that cannot be mapped.
    """
    axes = axes.upper()
    for alias in ('I', 'Q'):
        if alias in axes and 'Z' not in axes:
            axes = axes.replace(alias, 'Z')
    drop_sample = False
    if 'S' in axes:
        if 'C' in axes:
            drop_sample = True
        else:
            axes = axes.replace('S', 'C')

    kept = axes.replace('S', '') if drop_sample else axes
    unknown = set(kept) - set(HYPERSTACK_AXES)
    if unknown or len(set(kept)) != len(kept):
        raise ValidationError(f"Unsupported TIFF axes layout {axes!r}")
    return axes, drop_sample


def _axis_sizes(shape: Tuple[int, ...], axes: str) -> Dict[str, int]:
    axes, drop_sample = _canonical_axes(axes)
    sizes = dict(zip(axes, shape))
    if drop_sample:
        sizes.pop('S')
    return {ax: sizes.get(ax, 1) for ax in HYPERSTACK_AXES}


def _series_layout(
    tif: tifffile.TiffFile,
) -> Tuple[Tuple[int, ...], str, str]:
    """Shape, axes and dtype of the image data in an open TIFF.

    Files written one page at a time with shaped metadata hold one series
    per page. Series of identical layout are stacked along ``Z``.

    Raises
    ------
    ValidationError
        If the series differ in shape, dtype or axes, or already carry a
        page-sequence axis.
    """
    series = tif.series
    first = series[0]
    if len(series) == 1:
        return tuple(first.shape), first.axes, str(first.dtype)

    for other in series[1:]:
        if (other.shape != first.shape or other.dtype != first.dtype
                or other.axes != first.axes):
            raise ValidationError(
                f"TIFF holds {len(series)} series of differing layout; "
                f"cannot stack them as slices"
            )
    if set(first.axes.upper()) & set('ZIQ'):
        raise ValidationError(
            f"Cannot stack {len(series)} series with axes {first.axes!r} "
            f"as slices"
        )
    shape = (len(series),) + tuple(first.shape)
    return shape, 'Z' + first.axes, str(first.dtype)


def _series_data(tif: tifffile.TiffFile) -> np.ndarray:
    """Pixel data matching ``_series_layout``."""
    if len(tif.series) == 1:
        return tif.series[0].asarray()
    return np.stack([s.asarray() for s in tif.series])


def _to_tzcyx(data: np.ndarray, axes: str) -> np.ndarray:
    """Reorder *data* stored with *axes* into a 5D ``TZCYX`` array."""
    axes, drop_sample = _canonical_axes(axes)
    if drop_sample:
        data = np.take(data, 0, axis=axes.index('S'))
        axes = axes.replace('S', '')
    for ax in HYPERSTACK_AXES:
        if ax not in axes:
            data = data[np.newaxis]
            axes = ax + axes
    return np.transpose(data, [axes.index(ax) for ax in HYPERSTACK_AXES])


class HyperstackReader(ImageReader):
    """Read a TIFF file as a ``(T, Z, rows, cols)`` phase or hologram stack.

    Parameters
    ----------
    filepath : str or Path
        Path to a TIFF file.
    channel : int
        Channel to read from multi-channel files. Default 0.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file cannot be parsed as a TIFF.
    ValidationError
        If ``channel`` is out of range.

    Examples
    --------
    >>> from dhml.IO import HyperstackReader
    >>> with HyperstackReader('phase_633.tif') as reader:
    ...     stack = reader.read_full()          # (T, Z, rows, cols)
    ...     plane = reader.read_plane(z=0, t=2)
    """

    def __init__(self, filepath: Union[str, Path], channel: int = 0) -> None:
        self.channel = channel
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Load stack layout without reading pixel data."""
        try:
            with tifffile.TiffFile(str(self.filepath)) as tif:
                shape, axes, dtype = _series_layout(tif)
                ij_meta = dict(tif.imagej_metadata or {})
                is_imagej = tif.is_imagej
        except (tifffile.TiffFileError, OSError) as e:
            raise ValueError(f"Failed to load TIFF metadata: {e}") from e

        sizes = _axis_sizes(shape, axes)
        if not 0 <= self.channel < sizes['C']:
            raise ValidationError(
                f"channel {self.channel} out of range for a file with "
                f"{sizes['C']} channel(s)"
            )

        extras = {}
        if 'Info' in ij_meta:
            extras['info'] = ij_meta['Info']
        if 'unit' in ij_meta:
            extras['unit'] = ij_meta['unit']

        self.metadata = StackMetadata(
            format='ImageJ TIFF' if is_imagej else 'TIFF',
            rows=sizes['Y'],
            cols=sizes['X'],
            dtype=dtype,
            frames=sizes['T'],
            slices=sizes['Z'],
            channels=sizes['C'],
            axes=axes,
            extras=extras,
        )
        logger.debug("Opened %s: axes %s, shape %s", self.filepath, axes, shape)

    def read_full(self) -> np.ndarray:
        """Read the whole stack.

        Returns
        -------
        np.ndarray
            float32 array, shape ``(T, Z, rows, cols)``.
        """
        try:
            with tifffile.TiffFile(str(self.filepath)) as tif:
                _, axes, _ = _series_layout(tif)
                data = _series_data(tif)
        except (tifffile.TiffFileError, OSError) as e:
            raise ValueError(f"Failed to read TIFF data: {e}") from e
        return _to_tzcyx(data, axes)[:, :, self.channel].astype(np.float32)

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        """Read a spatial subset of every plane.

        Raises
        ------
        ValidationError
            If the chip bounds fall outside the plane.
        """
        if row_start < 0 or col_start < 0:
            raise ValidationError("Start indices must be non-negative")
        if row_end > self.metadata.rows or col_end > self.metadata.cols:
            raise ValidationError("End indices exceed image dimensions")
        if row_end <= row_start or col_end <= col_start:
            raise ValidationError("Chip must have a positive size")
        return self.read_full()[:, :, row_start:row_end, col_start:col_end]

    def read_plane(self, z: int = 0, t: int = 0) -> np.ndarray:
        """Read one ``(rows, cols)`` plane at slice *z* and frame *t*.

        Raises
        ------
        ValidationError
            If *z* or *t* is out of range.
        """
        if not 0 <= t < self.metadata.frames:
            raise ValidationError(
                f"Frame {t} out of range [0, {self.metadata.frames})"
            )
        if not 0 <= z < self.metadata.slices:
            raise ValidationError(
                f"Slice {z} out of range [0, {self.metadata.slices})"
            )
        return self.read_full()[t, z]


class HyperstackWriter(ImageWriter):
    """Write a stack as a float32 ImageJ hyperstack TIFF (axes ``TZYX``).

    Accepts 2D ``(rows, cols)``, 3D ``(Z, rows, cols)`` or 4D
    ``(T, Z, rows, cols)`` arrays. When metadata is given it is stored as
    JSON in the ImageJ ``Info`` property.

    Examples
    --------
    >>> from dhml.IO import HyperstackWriter
    >>> with HyperstackWriter('fine_map.tif') as writer:
    ...     writer.write(fine_stack)
    """

    def write(self, data: np.ndarray) -> None:
        """Write *data* to ``self.filepath``.

        Raises
        ------
        ValidationError
            If *data* is not 2D, 3D or 4D, or is complex-valued.
        """
        data = np.asarray(data)
        if np.iscomplexobj(data):
            raise ValidationError("Cannot write complex data to TIFF")
        if data.ndim == 2:
            data = data[np.newaxis, np.newaxis]
        elif data.ndim == 3:
            data = data[np.newaxis]
        elif data.ndim != 4:
            raise ValidationError(
                f"Expected a 2D, 3D or 4D stack, got shape {data.shape}"
            )

        ij_meta = {'axes': 'TZYX'}
        if self.metadata is not None:
            ij_meta['Info'] = json.dumps(self.metadata.to_dict(), default=str)

        tifffile.imwrite(
            str(self.filepath),
            data.astype(np.float32),
            imagej=True,
            metadata=ij_meta,
        )
        logger.debug("Wrote %s stack to %s", data.shape, self.filepath)
