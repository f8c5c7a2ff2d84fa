import io

import pytest

import consoletools.term
from consoletools import _typing as _t


@pytest.fixture
def ostream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def istream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def feed(istream: io.StringIO) -> _t.Callable[[str], None]:
    def feed(text: str):
        pos = istream.tell()
        istream.seek(0, io.SEEK_END)
        istream.write(text)
        istream.seek(pos)

    return feed


@pytest.fixture
def term(ostream: io.StringIO, istream: io.StringIO) -> consoletools.term.Term:
    return consoletools.term.Term(
        ostream,
        istream,
        color_support=consoletools.term.ColorSupport.ANSI,
    )


@pytest.fixture
def console(term: consoletools.term.Term) -> consoletools.term.Console:
    return consoletools.term.Console(term)


@pytest.fixture
def plain_console(
    ostream: io.StringIO, istream: io.StringIO
) -> consoletools.term.Console:
    return consoletools.term.Console(consoletools.term.Term(ostream, istream))
