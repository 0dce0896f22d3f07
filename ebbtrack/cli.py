"""Command line interface."""

from __future__ import annotations

import argparse
import json
import re
import sys
import time
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from ebbtrack.balance import compute_balance
from ebbtrack.dayoffs import (
    DayOffKind,
    add_day_off,
    change_message,
    edit_day_off,
    empty_list_message,
    list_day_offs,
    remove_day_off,
    render_day_off_table,
)
from ebbtrack.days_off import summarize_days_off
from ebbtrack.frames import all_projects, all_tags, remove_tag, rename_project, rename_tag
from ebbtrack.model import DayOffEntry, DayPortion, Period
from ebbtrack.report import build_report
from ebbtrack.settings import (
    _value_to_string,
    config_table,
    get_config_value,
    set_config_value,
)
from ebbtrack.storage import Store, default_config_dir

_TIMESTAMP = re.compile(r"-?\d+")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M")
_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")


def parse_datetime(text: str) -> datetime:
    """Parse a point in time given on the command line.

    Accepted are Unix timestamps, ``HH:MM[:SS]`` (today), ``YYYY-MM-DD HH:MM[:SS]``
    and ISO 8601. Times without an offset are local. The result is timezone-aware.
    """
    stripped = text.strip()
    if _TIMESTAMP.fullmatch(stripped):
        return datetime.fromtimestamp(int(stripped), tz=timezone.utc)
    for fmt in _TIME_FORMATS:
        try:
            moment = datetime.strptime(stripped, fmt).time()
        except ValueError:
            continue
        return datetime.combine(date.today(), moment).astimezone()
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(stripped, fmt).astimezone()
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(stripped)
    except ValueError:
        raise ValueError(f"invalid date or time: {text!r}") from None
    return parsed if parsed.tzinfo is not None else parsed.astimezone()


@dataclass(frozen=True)
class _Output:
    text: str
    data: Any


def _datetime_arg(text: str) -> datetime:
    try:
        return parse_datetime(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _date_arg(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {text!r}") from None


_DAY_OFF_STORAGE: dict[
    DayOffKind,
    tuple[
        Callable[[Store], dict[date, DayOffEntry]],
        Callable[[Store, Mapping[date, DayOffEntry]], None],
    ],
] = {
    DayOffKind.HOLIDAY: (Store.load_holidays, Store.save_holidays),
    DayOffKind.SICK_DAY: (Store.load_sick_days, Store.save_sick_days),
    DayOffKind.VACATION: (Store.load_vacations, Store.save_vacations),
}


def _run_balance(args: argparse.Namespace, store: Store) -> _Output:
    result = compute_balance(
        store.load_config(),
        store.load_frames(),
        store.load_state(),
        store.load_holidays(),
        store.load_sick_days(),
        store.load_vacations(),
        int(time.time()),
        args.period,
        args.start,
        args.end,
    )
    return _Output(result.to_text(), result.to_dict())


def _run_report(args: argparse.Namespace, store: Store) -> _Output:
    report = build_report(
        store.load_frames(),
        store.load_state(),
        int(time.time()),
        args.period,
        args.start,
        args.end,
        args.project,
        args.tag,
    )
    return _Output(report.to_text(), report.to_dict())


def _run_config(args: argparse.Namespace, store: Store) -> _Output:
    config = store.load_config()
    match args.action:
        case "get":
            value = get_config_value(config, args.key)
            return _Output(_value_to_string(value), {"key": args.key, "value": value})
        case "list":
            return _Output(config_table(config), {"config": config.to_dict()})
        case "set":
            updated, change = set_config_value(config, args.key, args.value)
            store.save_config(updated)
            return _Output(change.to_text(), change.to_dict())
    raise ValueError(f"unknown config command: {args.action!r}")


def _run_days_off(args: argparse.Namespace, store: Store) -> _Output:
    summary = summarize_days_off(
        store.load_config(), store.load_sick_days(), store.load_vacations(), args.year
    )
    return _Output(summary.to_text(), summary.to_dict())


def _change_day_off(
    entries: MutableMapping[date, DayOffEntry], kind: DayOffKind, args: argparse.Namespace
):
    match args.action:
        case "add":
            return add_day_off(entries, kind, args.date, args.description, args.portion)
        case "edit":
            return edit_day_off(entries, kind, args.date, args.description, args.portion)
        case "remove":
            return remove_day_off(entries, kind, args.date)
    raise ValueError(f"unknown command: {args.action!r}")


def _run_day_off(args: argparse.Namespace, store: Store) -> _Output:
    kind: DayOffKind = args.kind
    load, save = _DAY_OFF_STORAGE[kind]
    entries = load(store)

    if args.action == "list":
        day_offs = list_day_offs(entries, args.year)
        text = (
            render_day_off_table(day_offs)
            if day_offs
            else empty_list_message(kind, args.year)
        )
        filters = {} if args.year is None else {"year": args.year}
        data = {f"{kind.value}s": [day_off.to_dict() for day_off in day_offs], "filters": filters}
        return _Output(text, data)

    day_off = _change_day_off(entries, kind, args)
    save(store, entries)
    return _Output(change_message(kind, args.action, day_off), {kind.value: day_off.to_dict()})


def _run_project(args: argparse.Namespace, store: Store) -> _Output:
    frames = store.load_frames()
    if args.action == "list":
        projects = all_projects(frames)
        return _Output("\n".join(projects), {"projects": projects})
    rename_project(frames, args.old_name, args.new_name)
    store.save_frames(frames)
    return _Output(
        f"Project renamed from '{args.old_name}' to '{args.new_name}'.",
        {"old_name": args.old_name, "new_name": args.new_name},
    )


def _run_tag(args: argparse.Namespace, store: Store) -> _Output:
    frames = store.load_frames()
    match args.action:
        case "list":
            tags = all_tags(frames)
            return _Output("\n".join(tags), {"tags": tags})
        case "remove":
            remove_tag(frames, args.tag)
            store.save_frames(frames)
            return _Output(f"Tag '{args.tag}' removed from all frames.", {"tag": args.tag})
        case "rename":
            rename_tag(frames, args.old_name, args.new_name)
            store.save_frames(frames)
            return _Output(
                f"Tag renamed from '{args.old_name}' to '{args.new_name}'.",
                {"old_name": args.old_name, "new_name": args.new_name},
            )
    raise ValueError(f"unknown tag command: {args.action!r}")


def _add_timespan_options(parser: argparse.ArgumentParser) -> None:
    periods = parser.add_mutually_exclusive_group()
    for short, period in (("-d", Period.DAY), ("-w", Period.WEEK), ("-m", Period.MONTH), ("-y", Period.YEAR)):
        periods.add_argument(
            short,
            f"--{period.value}",
            dest="period",
            action="store_const",
            const=period,
            help=f"the current {period.value}",
        )
    parser.add_argument("--from", dest="start", type=_datetime_arg, help="start of the timespan")
    parser.add_argument("--to", dest="end", type=_datetime_arg, help="end of the timespan")


def _add_day_off_parser(
    commands: argparse._SubParsersAction, name: str, kind: DayOffKind
) -> None:
    parser = commands.add_parser(name, help=f"manage {kind.plural}")
    parser.set_defaults(handler=_run_day_off, kind=kind)
    actions = parser.add_subparsers(dest="action", required=True)
    for action in ("add", "edit"):
        sub = actions.add_parser(action, help=f"{action} a {kind.label}")
        sub.add_argument("date", type=_date_arg)
        sub.add_argument("description")
        sub.add_argument("-p", "--portion", type=DayPortion, choices=list(DayPortion))
    listing = actions.add_parser("list", help=f"list {kind.plural}")
    listing.add_argument("-y", "--year", type=int)
    remove = actions.add_parser("remove", help=f"remove a {kind.label}")
    remove.add_argument("date", type=_date_arg)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ebb", description="Track working time.")
    parser.add_argument("--format", choices=("text", "json"), default="text")
    parser.add_argument("--config-dir", help="directory holding the data files")
    commands = parser.add_subparsers(dest="command", required=True)

    balance = commands.add_parser("balance", help="expected versus tracked time")
    _add_timespan_options(balance)
    balance.set_defaults(handler=_run_balance)

    report = commands.add_parser("report", help="tracked time per project")
    _add_timespan_options(report)
    report.add_argument("-p", "--project")
    report.add_argument("-t", "--tag")
    report.set_defaults(handler=_run_report)

    config = commands.add_parser("config", help="read or change configuration")
    config.set_defaults(handler=_run_config)
    config_actions = config.add_subparsers(dest="action", required=True)
    config_actions.add_parser("get", help="show one value").add_argument("key")
    config_actions.add_parser("list", help="show all values")
    config_set = config_actions.add_parser("set", help="change one value")
    config_set.add_argument("key")
    config_set.add_argument("value")

    days_off = commands.add_parser("daysoff", help="vacation and sick days of a year")
    days_off.add_argument("-y", "--year", type=int, default=date.today().year)
    days_off.set_defaults(handler=_run_days_off)

    _add_day_off_parser(commands, "holiday", DayOffKind.HOLIDAY)
    _add_day_off_parser(commands, "sickday", DayOffKind.SICK_DAY)
    _add_day_off_parser(commands, "vacation", DayOffKind.VACATION)

    project = commands.add_parser("project", help="list or rename projects")
    project.set_defaults(handler=_run_project)
    project_actions = project.add_subparsers(dest="action", required=True)
    project_actions.add_parser("list", help="list projects")
    project_rename = project_actions.add_parser("rename", help="rename a project")
    project_rename.add_argument("old_name")
    project_rename.add_argument("new_name")

    tag = commands.add_parser("tag", help="list, remove or rename tags")
    tag.set_defaults(handler=_run_tag)
    tag_actions = tag.add_subparsers(dest="action", required=True)
    tag_actions.add_parser("list", help="list tags")
    tag_actions.add_parser("remove", help="remove a tag from all frames").add_argument("tag")
    tag_rename = tag_actions.add_parser("rename", help="rename a tag")
    tag_rename.add_argument("old_name")
    tag_rename.add_argument("new_name")

    return parser


def _error_message(exc: Exception) -> str:
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc)


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = _build_parser().parse_args(argv)
    store = Store(args.config_dir if args.config_dir else default_config_dir())
    try:
        output = args.handler(args, store)
    except (ValueError, LookupError, OSError) as exc:
        print(f"Error: {_error_message(exc)}", file=sys.stderr)
        return 1
    if args.format == "json":
        print(json.dumps(output.data, indent=2, ensure_ascii=False))
    else:
        print(output.text)
    return 0