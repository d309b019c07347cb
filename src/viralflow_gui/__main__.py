# __main__.py
# CLI entry point
#

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Any

from rich.console import Console
from rich.markup import escape

from viralflow_gui.config import KIND_STDERR
from viralflow_gui.context import RunContext
from viralflow_gui.logstream import LogStreamReducer
from viralflow_gui.params_io import params_to_text, parse_params_text, read_params_file, write_params_file
from viralflow_gui.store import ParamsStore, default_store_dir, load_config

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viralflow-gui",
        description="ViralFlow parameter editor and (simulated) launcher"
    )

    parser.add_argument(
        "-p", "--params",
        help="Load a .params file instead of the stored parameters"
    )

    parser.add_argument(
        "--set",
        action="append", default=[], metavar="KEY=VALUE",
        help="Repeatable: set one parameter, value written as in a .params file")

    parser.add_argument(
        "-o", "--export",
        help="Write the (normalized) parameters to a .params file"
    )

    parser.add_argument(
        "--save",
        action="store_true",
        help="Store the resulting parameters for the next session"
    )

    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the .params text that a run would use"
    )

    parser.add_argument(
        "--run",
        action="store_true",
        help="Launch a (simulated) ViralFlow run and print its log"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="With --run: build the command only; do not write the params file"
    )

    parser.add_argument(
        "--store-dir",
        help="Directory holding params.json / config.json"
    )

    parser.add_argument(
        "--gui",
        action="store_true",
        help="Open the graphical interface"
    )

    return parser


def apply_overrides(params: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """KEY=VALUE edits, parsed with the .params value rules; rejected values raise"""
    out = dict(params)
    for item in overrides:
        key, sep, value = item.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key:
            raise ValueError(f"Invalid --set '{item}'. Expected format: KEY=VALUE")
        parsed = parse_params_text(f"{key} {value or 'null'}")
        if key not in parsed:
            raise ValueError(f"Invalid value for '{key}': '{value}'")
        out.update(parsed)
    return out


def print_log(entries) -> None:
    for e in entries:
        style = "red" if e.kind == KIND_STDERR else None
        console.print(e.text, style=style, end="", markup=False, highlight=False, soft_wrap=True)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.gui:
        from viralflow_gui.ui.app import main as gui_main
        gui_main()
        return 0

    store_dir = Path(args.store_dir) if args.store_dir else default_store_dir()
    store = ParamsStore(store_dir)

    try:
        params = read_params_file(args.params) if args.params else store.load()
        params = apply_overrides(params, args.set)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 2

    if args.save:
        p = store.save(params)
        console.print(f"Saved: {p}", soft_wrap=True)

    if args.show:
        console.print(params_to_text(params), end="", markup=False, highlight=False, soft_wrap=True)

    if args.export:
        try:
            out = write_params_file(args.export, params)
        except OSError as e:
            err_console.print(f"[red]Error:[/red] could not write {escape(args.export)}: {escape(str(e))}")
            return 2
        console.print(f"Wrote: {out}", soft_wrap=True)

    if args.run:
        log = LogStreamReducer()
        ctx = RunContext(params=params, config=load_config(store_dir), sink=log.apply, dry_run=args.dry_run)
        outcome = ctx.run()
        print_log(log.entries)

        if outcome.exit_code != 0:
            err_console.print("\nRun failed.")
            return 2
        if args.dry_run:
            console.print("\nDry run: params file not written.")
        else:
            console.print(f"\nParams file: {outcome.command.params_path}", soft_wrap=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
