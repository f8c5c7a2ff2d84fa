from __future__ import annotations

import io

import consoletools.term

from sybil import Sybil
from sybil.parsers.codeblock import PythonCodeBlockParser
from sybil.parsers.doctest import DocTestParser
from sybil.parsers.rest import SkipParser


def _setup(*_args, **_kwargs):
    consoletools.term.setup(
        term=consoletools.term.Term(io.StringIO(), io.StringIO()),
        color_table=consoletools.term.ColorTable.DEFAULT,
    )


def _teardown(*_args, **_kwargs):
    consoletools.term._CONSOLE = None


pytest_collect_file = Sybil(
    parsers=[
        DocTestParser(),
        PythonCodeBlockParser(),
        SkipParser(),
    ],
    patterns=["*.rst", "*.py"],
    excludes=["examples/*", "docs/*", "setup.py"],
    setup=_setup,
    teardown=_teardown,
).pytest()
