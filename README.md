# ebbtrack

A small command-line tool for tracked working time. Time is kept as frames,
each belonging to a project with optional tags. ebbtrack answers two
questions about them: where did the time go, and how far ahead of or behind
your working hours are you?

It also keeps holidays, sick days and vacations, each covering a full day
or half a day. The balance takes them out of the hours you are expected to
work.

## Installation

```
pip install .
```

This installs the `ebbtrack` command.

## Data directory

All data lives in plain TOML files in one directory:

- `config.toml`: weekly working hours and yearly vacation and sick-day allowances
- `frames.toml`: finished frames
- `state.toml`: the frame that is running now, if there is one
- `holidays.toml`, `sick_days.toml`, `vacations.toml`

The directory is chosen in this order:

1. the `--config-dir` option
2. the `EBB_CONFIG_DIR` environment variable
3. `$XDG_CONFIG_HOME/ebb`
4. `~/.config/ebb`

Environment variables and `~` in these paths are expanded. A missing file
counts as empty. Without a `config.toml` the working hours are 8h Monday to
Friday, no hours at the weekend, and no allowances.

## Usage

```
ebbtrack --help
```

Options that apply to every command, `--format` and `--config-dir`, come
before the command name.

### Balance and reports

```
ebbtrack balance --week                 # expected, actual and remaining time this week
ebbtrack report --month                 # time per project and tag this month
ebbtrack report --project myproject --tag review
ebbtrack report --from "2025-05-01 00:00" --to "2025-06-01 00:00"
```

`-d/--day`, `-w/--week`, `-m/--month` and `-y/--year` cover the current
period from local midnight on its first day until now. Without a period the
span runs from `--from` (or the first frame, or the epoch) to `--to` (or
now). A running frame counts up to now. Only frames lying wholly inside the
span are counted.

`--from` and `--to` accept a Unix timestamp, `HH:MM[:SS]` (today),
`YYYY-MM-DD HH:MM[:SS]`, or ISO 8601. Times without an offset are local.
`--to` must be after `--from`.

### Projects and tags

```
ebbtrack project list
ebbtrack project rename old-name new-name
ebbtrack tag list
ebbtrack tag rename old new
ebbtrack tag remove obsolete
```

### Holidays, sick days and vacations

```
ebbtrack holiday add 2025-05-28 "Mountain Day"
ebbtrack holiday list -y 2025
ebbtrack sickday add 2025-05-29 fever -p half
ebbtrack sickday edit 2025-05-29 hayfever -p full
ebbtrack sickday remove 2025-05-29
ebbtrack vacation add 2025-08-04 "Summer trip"
ebbtrack daysoff --year 2025            # vacation and sick days allowed, taken, remaining
```

`holiday`, `sickday` and `vacation` all take `add`, `edit`, `list` and
`remove`. If you leave out `-p/--portion` the entry covers a full day.
Adding on a date that already has an entry of that kind is an error, and so
is editing or removing a date that has none. `daysoff` uses the current
year by default.

### Configuration

```
ebbtrack config list
ebbtrack config get working_hours.monday
ebbtrack config set working_hours.wednesday 4h
ebbtrack config set vacation_days_per_year.2025 28
```

Working hours are durations such as `8h` or `7h 30m`. Values under
`vacation_days_per_year.<year>` and `sick_days_per_year.<year>` must be
integers.

### Output and errors

Add `--format json`, for example `ebbtrack --format json balance --week`,
to get JSON instead of text. On failure the command prints `Error: ...` to
standard error and exits with status 1.

## Using it as a library

The calculations work without the command line:

```python
from ebbtrack.storage import Store
from ebbtrack.balance import compute_balance

store = Store("/path/to/data")
result = compute_balance(
    store.load_config(), store.load_frames(), store.load_state(),
    store.load_holidays(), store.load_sick_days(), store.load_vacations(),
    now=1735689600, period=None, start=None, end=None,
)
print(result.to_text())
```

Some other entry points:

- `ebbtrack.report.build_report`
- `ebbtrack.days_off.summarize_days_off`
- the helpers in `ebbtrack.frames`, `ebbtrack.dayoffs` and `ebbtrack.settings`
- `Store`, which has `load_*` and `save_*` methods for each data file

## What it does not do

ebbtrack has no command to start, stop or restart tracking. It reads
`frames.toml` and `state.toml` but never creates frames or a running frame
itself. The command line writes `frames.toml` only when you rename a
project or tag or remove a tag. To record time, write these files yourself,
or use `Store.save_frames` and `Store.save_state`.

## Development

```
pip install -e ".[test]"
pytest
```