# -*- coding: utf-8 -*-
"""
DHML Exception Hierarchy - Domain-specific exceptions for DHML operations.

Lets callers catch DHML errors distinctly from Python built-in exceptions.
Every DHML exception subclasses both ``DhmlError`` and the closest
built-in exception, so ``except ValueError`` keeps working for input
problems.

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


class DhmlError(Exception):
    """Base exception for all DHML errors."""


class ValidationError(DhmlError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape mismatches, non-finite phase data, non-positive
    wavelengths, equal wavelengths, and out-of-range stack indices.
    """

