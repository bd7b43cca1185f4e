# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for DHM processors.

Defines ``ImageProcessor``, the common base of every DHML processor, and
``ImageTransform`` for processors that map one image array to another.
``ImageProcessor`` warns once per class when no processor version has
been declared, collects ``typing.Annotated`` tunable parameters into
``__param_specs__`` (generating ``__init__`` when the subclass has none),
merges runtime overrides through ``_resolve_params`` and forwards progress
to an optional ``progress_callback``.

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
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# DHML internal
from dhml.exceptions import ValidationError
from dhml.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all DHML processors.

    **Version checking**: concrete subclasses without
    ``@processor_version('x.y.z')`` trigger a ``UserWarning`` at first
    instantiation. The check lives in ``__new__`` so class decorators
    have already run.

    **Tunable parameters**: subclasses declare parameters as
    ``Annotated`` class fields with ``Range``/``Options``/``Desc``
    markers. ``__init_subclass__`` collects them into ``__param_specs__``
    and generates a keyword-only ``__init__`` unless the subclass defines
    its own. ``_resolve_params(kwargs)`` merges instance values with
    per-call overrides and validates them.

    **Progress**: long-running methods call ``_report_progress`` which
    forwards a fraction in ``[0, 1]`` to a ``progress_callback`` keyword
    argument when the caller supplied one.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance parameter values with runtime *kwargs* overrides.

        Keys in *kwargs* that are not declared parameters (for example
        ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValueError
            If a value violates range or choices constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Forward *fraction* to ``kwargs['progress_callback']`` if present."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for image-to-image transforms.

    Subclasses implement ``apply`` on numpy arrays.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source image array.

        Parameters
        ----------
        source : np.ndarray
            Input image, ``(rows, cols)`` or ``(planes, rows, cols)``.

        Returns
        -------
        np.ndarray
            Transformed image.
        """
        ...


class BandwiseTransformMixin:
    """Mixin that applies a 2D transform to every plane of a 3D stack.

    ``apply()`` accepts ``(rows, cols)`` or ``(planes, rows, cols)``
    arrays and calls the subclass's ``_apply_2d()`` once per plane.
    Progress is reported per plane for stacks. Any other dimensionality
    raises ``ValidationError``.

    Usage
    -----
    ::

        class MyFilter(BandwiseTransformMixin, ImageTransform):
            def _apply_2d(self, source, **kwargs):
                ...
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform to a 2D plane or a 3D stack of planes."""
        source = np.asarray(source)
        if source.ndim == 2:
            return self._apply_2d(source, **kwargs)
        if source.ndim != 3:
            raise ValidationError(
                f"{type(self).__name__} expects a 2D plane or 3D stack, "
                f"got array with shape {source.shape}"
            )

        n = source.shape[0]
        if n == 0:
            raise ValidationError(
                f"{type(self).__name__} received an empty stack"
            )
        planes = []
        for i in range(n):
            planes.append(self._apply_2d(source[i], **kwargs))
            self._report_progress(kwargs, (i + 1) / n)
        return np.stack(planes)

    @abstractmethod
    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform to a single 2D plane."""
        ...
