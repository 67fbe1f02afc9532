"""
Common utilities for the places client.
"""

import decimal
import json
import logging
import math
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def formatDecimal(value: float) -> str:
    """
    Format float as plain decimal string suitable for query parameters.

    Integral values are printed without fractional part, other values use
    shortest round-trip representation. Exponent notation is never used.

    Args:
        value: Number to format

    Returns:
        Decimal string representation

    Example:
        >>> formatDecimal(20.0)
        '20'
        >>> formatDecimal(-122.40)
        '-122.4'
        >>> formatDecimal(1e-7)
        '0.0000001'
    """
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        # There is no plain decimal form for these, let server decide what to do
        return repr(value)

    text = repr(value)
    if "e" in text or "E" in text:
        text = format(decimal.Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    """
    Dump data to JSON with non-ASCII characters kept and keys sorted.

    Separators are compact unless ``compact=False`` or ``indent`` is given,
    extra keyword arguments go to ``json.dumps`` as is.
    """
    options: Dict[str, Any] = {"ensure_ascii": False, "default": str, "sort_keys": True}
    if compact is None:
        compact = "indent" not in kwargs
    if compact:
        options["separators"] = (",", ":")
    options.update(kwargs)
    return json.dumps(data, **options)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Read ``KEY=VALUE`` lines of a .env file.

    Blank lines and ``#`` comments are skipped, value is everything after the first ``=``
    with surrounding double quotes removed. Variables already present in the environment
    keep their values.

    Args:
        path: Path to .env file
        populateEnv: Whether to export parsed variables into ``os.environ``

    Returns:
        Parsed variables
    """
    variables: Dict[str, str] = {}
    with open(path, "rt", encoding="utf-8") as f:
        for rawLine in f:
            line = rawLine.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                logger.warning(f"Skipping malformed line in {path}: {line!r}")
                continue
            variables[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for key, value in variables.items():
            os.environ.setdefault(key, value)
    logger.debug(f"Loaded {len(variables)} variables from {path}")
    return variables
