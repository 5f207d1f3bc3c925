import io

import pytest
from rich.console import Console

from phrased.builtins import ASYNC_ASSERTIONS, BUILTIN_ASSERTIONS, COLLECTIONS
from phrased.cli import CLIApplication


def make_console(width=200):
    return Console(file=io.StringIO(), width=width, color_system=None)


def output_lines(console):
    return console.file.getvalue().splitlines()


def test_ids_lists_every_builtin():
    console = make_console()

    exit_code = CLIApplication(console).run(["ids"])

    assert exit_code == 0
    lines = output_lines(console)
    assert lines == [assertion.id for assertion in BUILTIN_ASSERTIONS]
    assert len(lines) == len(set(lines))


def test_ids_filters_by_collection_and_partition():
    console = make_console()

    CLIApplication(console).run(["ids", "--collection", "sync-basic"])
    assert output_lines(console) == [assertion.id for assertion in COLLECTIONS["sync-basic"]]

    console = make_console()
    CLIApplication(console).run(["ids", "--async"])
    assert output_lines(console) == [assertion.id for assertion in ASYNC_ASSERTIONS]


def test_phrases_renders_table():
    console = make_console(width=400)

    CLIApplication(console).run(["phrases", "--collection", "sync-parametric"])

    text = console.file.getvalue()
    assert "Assertions" in text
    assert "'to satisfy'" in text


def test_unknown_collection_is_rejected():
    with pytest.raises(SystemExit):
        CLIApplication(make_console()).run(["ids", "--collection", "nope"])
