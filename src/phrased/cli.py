from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from .assertion import Assertion
from .builtins import BUILTIN_ASSERTIONS, COLLECTIONS


class CLIApplication:
    """Top-level command router."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.parser = argparse.ArgumentParser(
            prog="phrased",
            description="Inspect the builtin assertion catalog.",
        )
        subparsers = self.parser.add_subparsers(dest="command", required=True)
        for name, help_text in (
            ("ids", "List assertion ids, one per line."),
            ("phrases", "Show a table of assertions with their phrases and slots."),
        ):
            command = subparsers.add_parser(name, help=help_text)
            command.add_argument(
                "--collection",
                choices=sorted(COLLECTIONS),
                help="Only list assertions from this collection.",
            )
            partition = command.add_mutually_exclusive_group()
            partition.add_argument("--sync", dest="partition", action="store_const", const="sync")
            partition.add_argument("--async", dest="partition", action="store_const", const="async")

    def run(self, argv: Sequence[str] | None = None) -> int:
        args = self.parser.parse_args(argv)
        command = IdsCommand if args.command == "ids" else PhrasesCommand
        command(self.console, args).run()
        return 0


class CatalogCommand:
    """Shared selection logic for catalog listings."""

    def __init__(self, console: Console, args: argparse.Namespace) -> None:
        self.console = console
        self.collection = args.collection
        self.partition = args.partition

    def assertions(self) -> list[Assertion]:
        selected = COLLECTIONS[self.collection] if self.collection else BUILTIN_ASSERTIONS
        if self.partition == "sync":
            return [assertion for assertion in selected if not assertion.is_async]
        if self.partition == "async":
            return [assertion for assertion in selected if assertion.is_async]
        return list(selected)

    def run(self) -> None:
        raise NotImplementedError


class IdsCommand(CatalogCommand):
    """`phrased ids`: plain id listing, suitable for piping."""

    def run(self) -> None:
        for assertion in self.assertions():
            self.console.print(assertion.id, highlight=False, soft_wrap=True)


class PhrasesCommand(CatalogCommand):
    """`phrased phrases`: rich table of the catalog."""

    def run(self) -> None:
        table = Table(title="Assertions")
        table.add_column("Phrases", style="cyan")
        table.add_column("Subject")
        table.add_column("Parameters")
        table.add_column("Mode", style="magenta")
        table.add_column("Id", style="dim")
        for assertion in self.assertions():
            subject, *rest = assertion.slots
            table.add_row(
                str(assertion.phrase),
                subject.name,
                ", ".join(slot.name for slot in rest) or "-",
                "async" if assertion.is_async else "sync",
                assertion.id,
            )
        self.console.print(table)


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(CLIApplication().run(argv))
