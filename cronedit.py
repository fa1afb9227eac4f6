#!/usr/bin/python3

"""
Reads a cron expression and prints what each of its fields means, the
period it's edited at and its canonical value.
>>> main(["1,4 * * * *"])
minute: 1,4
hour: every hour
day-of-month: every day of the month
month: every month
day-of-week: every day of the week
period: minute
value: 1,4 * * * *
0
>>> main(["0 9 * 1,7 1-5", "--humanize", "--period", "day"])
minute: 0
hour: 9
day-of-month: every day of the month
month: every month
day-of-week: MON-FRI
period: day
value: 0 9 * * MON-FRI
0
"""

import argparse
import logging
import sys

from cronconfig import ClearAction, AllowEmpty, DEFAULT_SHORTCUTS
from croneditor import CronEditor
from cronlocale import period_label
from cronmodel import Period


def parse_period(period_str):
    """
    Parses the name of a period.
    >>> parse_period("year").value
    'year'
    >>> parse_period("week")
    Traceback (most recent call last):
    ...
    argparse.ArgumentTypeError: period should be one of minute, hour, day, month, year: was week
    """
    try:
        return Period(period_str)
    except ValueError:
        raise argparse.ArgumentTypeError(
            "period should be one of {}: was {}".format(
                ', '.join(p.value for p in Period), period_str)) from None


def describe(editor):
    """Returns the lines printed for the editor's current state."""
    lines = ["{}: {}".format(title, label)
             for title, label in editor.labels().items()]
    lines.append("period: {}".format(
        period_label(editor.period, editor.config.locale)))
    lines.append("value: {}".format(editor.value))
    return lines


def main(argv=None):
    p = argparse.ArgumentParser(description="""Reads a cron expression and
                                 prints how it breaks down into fields""")
    p.add_argument('expression', help="the cron expression or shortcut")
    p.add_argument('--period', type=parse_period,
                   help="""rewrite the expression at this period""")
    p.add_argument('--clear', action='store_true',
                   help="""clear the expression after reading it""")
    p.add_argument('--clear-action', default=ClearAction.reset.value,
                   choices=[a.value for a in ClearAction],
                   help="""what clearing replaces the expression with""")
    p.add_argument('--allow-empty', default=AllowEmpty.for_default_value.value,
                   choices=[a.value for a in AllowEmpty],
                   help="""whether an empty expression is acceptable""")
    p.add_argument('--all-shortcuts', action='store_true',
                   help="""accept every shortcut, @reboot included""")
    p.add_argument('--humanize', action='store_true',
                   help="""write months and week days by name""")
    p.add_argument('-v', '--verbose', action='store_true')
    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING)

    editor = CronEditor(
        args.expression,
        shortcuts=True if args.all_shortcuts else DEFAULT_SHORTCUTS,
        clear_button_action=args.clear_action,
        allow_empty=args.allow_empty,
        humanize_value=args.humanize)
    if args.period is not None:
        editor.set_period(args.period)
    elif (editor.error is None and editor.value.strip()
          and not editor.expression.is_shortcut):
        # rewrite in canonical form
        editor.set_period(editor.period)
    if args.clear:
        editor.clear()
    for line in describe(editor):
        print(line)
    if editor.error is not None:
        print(editor.error['description'], file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
