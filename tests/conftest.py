from __future__ import annotations

from pathlib import Path

import islpy as isl
import pytest
from _pytest.config import argparsing

from polymatch import ScheduleTree


# ---------------------------------------------------------------------------- #
# Pytest hooks                                                                 #
# ---------------------------------------------------------------------------- #


def pytest_addoption(parser: argparsing.Parser):
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Update golden outputs.",
    )


# ---------------------------------------------------------------------------- #
# Pytest fixtures                                                              #
# ---------------------------------------------------------------------------- #


@pytest.fixture
def golden(request):
    """
    A fixture to load the golden output for the requesting test. Should be
    checked against some actual output in at least one assertion.
    """

    basedir = request.config.rootpath / "tests"
    testpath = Path(request.fspath)

    p = (
        basedir
        / "golden"
        / (
            testpath.relative_to(basedir).with_suffix("") / request.node.name
        ).with_suffix(".txt")
    )

    text = p.read_text() if p.exists() else None
    yield GoldenOutput(p, text, request.config)


@pytest.fixture
def two_statements():
    """Domain -> Sequence(Filter -> Leaf, Filter -> Leaf)"""
    T = ScheduleTree
    return T.Domain(
        "{ S[i] : 0 <= i < 10; T[i] : 0 <= i < 10 }",
        [
            T.Sequence(
                [
                    T.Filter("{ S[i] }", [T.Leaf()]),
                    T.Filter("{ T[i] }", [T.Leaf()]),
                ]
            )
        ],
    )


@pytest.fixture
def three_statements():
    """Domain -> Sequence(Filter -> Band -> Leaf, Filter -> Leaf, Filter -> Mark -> Leaf)"""
    T = ScheduleTree
    return T.Domain(
        None,
        [
            T.Sequence(
                [
                    T.Filter("{ S[i] }", [T.Band("[{ S[i] -> [(i)] }]", [T.Leaf()])]),
                    T.Filter("{ T[i] }", [T.Leaf()]),
                    T.Filter("{ U[i] }", [T.Mark("kernel", [T.Leaf()])]),
                ]
            )
        ],
    )


@pytest.fixture
def isl_schedule():
    return isl.Schedule.read_from_str(
        isl.DEFAULT_CONTEXT,
        '{ domain: "{ S[i] : 0 <= i < 10; T[i] : 0 <= i < 10 }", '
        'child: { sequence: [ { filter: "{ S[i] }" }, { filter: "{ T[i] }" } ] } }'
    )


# ---------------------------------------------------------------------------- #
# Implementation classes                                                       #
# ---------------------------------------------------------------------------- #


class GoldenOutput(str):
    _missing = "\0"

    def __new__(cls, path, text, config):
        return str.__new__(cls, cls._missing if text is None else text)

    def __init__(self, path, _, config):
        self.path = path
        self.update = config.getoption("--update-golden")
        self.verbose = config.getoption("verbose")

    def __eq__(self, actual):
        if isinstance(actual, GoldenOutput) and self.path != actual.path:
            return False

        if super().__eq__(self._missing) and not self.update:
            # Hides this stack frame in the PyTest traceback.
            __tracebackhide__ = True

            message = f"golden output missing: {self.path}.\n"

            if self.verbose:
                message += (
                    f"Actual output:\n"
                    f"{actual}\n"
                    f"Did you forget to run with --update-golden?"
                )
            else:
                message += "Run with -v (verbose) to see actual output."

            pytest.fail(message)

        equal = super().__eq__(actual)
        if not equal and self.update:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(actual))
        return equal or self.update
