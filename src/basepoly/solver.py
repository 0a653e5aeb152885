"""Constant-term recovery from base-encoded sample points.

Runs one pass of the pipeline per call:
1. Parse the input document and decode every point's y value
2. Select the k points with the smallest x
3. Interpolate P(0) over the selected subset
4. Verify the subset polynomial reproduces every supplied point

Any failure raises a SolverError subclass and aborts the call.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import NamedTuple

from basepoly.digits import decode, to_decimal
from basepoly.errors import (
    SolverError, MissingField, InvalidCount, InsufficientPoints,
    DuplicateAbscissa, VerificationFailed,
)
from basepoly.lagrange import constant_term, evaluate, find_mismatches

logger = logging.getLogger(__name__)

KEYS_FIELD = 'keys'

_ABSCISSA_RE = re.compile(r'-?\d+')


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Dataset:
    required: int  # k
    total: int  # declared n
    points: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Result:
    constant_term: int
    selected_points: tuple
    all_points: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Wire form: big integers as decimal strings."""
        return {
            'constantTerm': to_decimal(self.constant_term),
            'selectedPoints': [
                {'x': p.x, 'y': to_decimal(p.y)} for p in self.selected_points
            ],
        }


def _require_count(keys: dict, name: str) -> int:
    if name not in keys:
        raise MissingField(f"Missing field {KEYS_FIELD}.{name}")
    value = keys[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise MissingField(f"{KEYS_FIELD}.{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidCount(f"{KEYS_FIELD}.{name} must be positive, got {to_decimal(value)}")
    return value


def _parse_abscissa(key) -> int:
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    if isinstance(key, str) and _ABSCISSA_RE.fullmatch(key):
        try:
            return int(key)
        except ValueError:
            # past the interpreter's str-to-int digit limit
            raise MissingField(f"x key too long: {len(key)} digits", key=key) from None
    raise MissingField(f"Invalid x key: {key!r}", key=key)


def _decode_point(key, entry) -> Point:
    x = _parse_abscissa(key)
    if not isinstance(entry, dict) or 'base' not in entry \
            or not isinstance(entry.get('value'), str):
        raise MissingField(f"Bad point format at key {key}", key=key)
    try:
        y = decode(entry['value'], entry['base'])
    except SolverError as e:
        raise e.with_key(key) from e
    return Point(x, y)


def parse_dataset(data) -> Dataset:
    """Validate the input document and decode all points.

    Args:
        data: Mapping of the form {"keys": {"n": int, "k": int},
              "<x>": {"base": ..., "value": "..."}, ...}, or its JSON text.

    Returns:
        Dataset with points in document order.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise MissingField(f"Invalid input JSON: {e}") from e
    if not isinstance(data, dict):
        raise MissingField("Invalid input JSON: expected an object")

    keys = data.get(KEYS_FIELD)
    if not isinstance(keys, dict):
        raise MissingField("Invalid input JSON: missing keys")
    n = _require_count(keys, 'n')
    k = _require_count(keys, 'k')

    points = tuple(
        _decode_point(key, entry)
        for key, entry in data.items()
        if key != KEYS_FIELD
    )
    return Dataset(required=k, total=n, points=points)


def select_subset(points, k: int) -> tuple:
    """Deterministically pick the k points with the smallest x."""
    if len(points) < k:
        raise InsufficientPoints(f"Need at least k={k} points, got {len(points)}")

    selected = tuple(sorted(points, key=lambda p: p.x)[:k])
    seen = set()
    for p in selected:
        if p.x in seen:
            raise DuplicateAbscissa(
                f"Duplicate x value {to_decimal(p.x)} in selected points",
                key=to_decimal(p.x),
            )
        seen.add(p.x)
    return selected


class PolynomialSolver:
    """Orchestrates parse, select, interpolate and verify.

    Holds configuration only; one instance may serve any number of calls.
    """

    def __init__(self, strict_count: bool = False):
        """
        strict_count: if True, the number of point entries must equal the
                      declared keys.n; otherwise a mismatch is only logged.
        """
        self.strict_count = strict_count

    def parse(self, data) -> Dataset:
        """Step 1: parse the document and decode every point."""
        dataset = parse_dataset(data)
        logger.debug("Parsed dataset: n=%d k=%d points=%d",
                     dataset.total, dataset.required, len(dataset.points))
        if len(dataset.points) != dataset.total:
            if self.strict_count:
                raise InvalidCount(
                    f"{KEYS_FIELD}.n declares {to_decimal(dataset.total)} points, "
                    f"got {len(dataset.points)}"
                )
            logger.warning("keys.n declares %d points but %d were supplied",
                           dataset.total, len(dataset.points))
        return dataset

    def select(self, dataset: Dataset) -> tuple:
        """Step 2: choose the interpolation subset."""
        selected = select_subset(dataset.points, dataset.required)
        logger.debug("Selected x values: %s", [p.x for p in selected])
        return selected

    def interpolate(self, selected: tuple) -> int:
        """Step 3: P(0) over the selected subset."""
        return constant_term(list(selected))

    def verify(self, selected: tuple, points) -> None:
        """Step 4: every supplied point must lie on the subset polynomial."""
        mismatches = find_mismatches(list(selected), points)
        if not mismatches:
            return
        first = mismatches[0]
        actual = evaluate(first.x, list(selected))
        logger.info("Verification failed for %d of %d points",
                    len(mismatches), len(points))
        raise VerificationFailed(
            f"Polynomial determined from selected points does not match "
            f"point x={to_decimal(first.x)}: expected {to_decimal(first.y)}, "
            f"got {to_decimal(actual)}",
            points=mismatches, key=to_decimal(first.x),
        )

    def solve(self, data) -> Result:
        """Run the full pipeline on one input document."""
        dataset = self.parse(data)
        selected = self.select(dataset)
        c = self.interpolate(selected)
        self.verify(selected, dataset.points)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Constant term: %s", to_decimal(c))
        return Result(
            constant_term=c,
            selected_points=selected,
            all_points=tuple(sorted(dataset.points, key=lambda p: p.x)),
        )


def solve(data, strict_count: bool = False) -> Result:
    """Recover P(0) from an encoded point set. See PolynomialSolver."""
    return PolynomialSolver(strict_count=strict_count).solve(data)
