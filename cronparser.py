"""
Turns raw cron text into a CronExpression, or a Shortcut when the text is a
single enabled shortcut token. Only the shape of the text is checked here;
numbers outside a field's bounds are left for the validator.
>>> parse_expression("1,4 * * * *")
CronExpression('1,4 * * * *')
>>> parse_expression("  */5  9-17 * jan-mar mon-fri ")
CronExpression('*/5 9-17 * 1-3 1-5')
>>> parse_expression("@reboot", shortcuts=True)
Shortcut('@reboot')
>>> parse_expression("99 * * * *")
CronExpression('99 * * * *')
"""

import re

from cronconfig import resolve_shortcuts
from cronmodel import (
    Field, Wildcard, Discrete, Step, CronExpression, Shortcut,
    DEFAULT_SHORTCUTS)


_NUMBER = re.compile('[0-9]+')


class CronError(ValueError):
    """Base for every problem found in a cron value."""


class CronSyntaxError(CronError):

    def __init__(self, message, text):
        super().__init__("{}: {!r}".format(message, text))
        self.text = text


def parse_expression(raw, shortcuts=DEFAULT_SHORTCUTS):
    """
    Parses a whole expression.
    >>> parse_expression("@daily")
    Shortcut('@daily')
    >>> parse_expression("@reboot")
    Traceback (most recent call last):
    ...
    cronparser.CronSyntaxError: Unsupported shortcut: '@reboot'
    >>> parse_expression("* * * *")
    Traceback (most recent call last):
    ...
    cronparser.CronSyntaxError: Expected 5 fields, got 4: '* * * *'
    """
    tokens = raw.split()
    if len(tokens) == 1 and tokens[0].startswith('@'):
        token = tokens[0].lower()
        if token not in resolve_shortcuts(shortcuts):
            raise CronSyntaxError("Unsupported shortcut", tokens[0])
        return Shortcut(token)
    if len(tokens) != len(Field):
        raise CronSyntaxError("Expected {} fields, got {}".format(
            len(Field), len(tokens)), raw)
    return CronExpression(parse_field(token, field)
                          for token, field in zip(tokens, Field))


def parse_field(token, field):
    """
    Parses the text of one field.
    >>> parse_field("*", Field.month)
    Wildcard(month:*)
    >>> parse_field("*/5", Field.minute)
    Step(minute:*/5)
    >>> parse_field("1-5/2", Field.hour)
    Step(hour:1-5/2)
    >>> parse_field("4,1-3", Field.minute)
    Discrete(minute:1-4)
    >>> parse_field("Sat,sun", Field.dow)
    Discrete(dow:0,6)
    """
    if token == '*':
        return Wildcard(field)
    if '/' in token:
        return parse_step(token, field)
    return Discrete(field, parse_list(token, field))


def parse_step(token, field):
    """
    Parses */n or a-b/n. The interval isn't checked for being positive,
    that's a range problem rather than a syntax one.
    >>> parse_step("*/0", Field.minute).interval
    0
    >>> parse_step("5/10", Field.minute)
    Traceback (most recent call last):
    ...
    cronparser.CronSyntaxError: Invalid step: '5/10'
    """
    base, _, interval = token.partition('/')
    if not _NUMBER.fullmatch(interval):
        raise CronSyntaxError("Invalid step", token)
    interval = int(interval)
    if base == '*':
        return Step(field, interval)
    if '-' not in base:
        raise CronSyntaxError("Invalid step", token)
    start, end = parse_range(base, field)
    return Step(field, interval, start, end)


def parse_list(token, field):
    """
    Parses a comma separated list of numbers and ranges into the numbers
    it covers.
    >>> parse_list("1-3,7", Field.minute)
    [1, 2, 3, 7]
    >>> parse_list("5-1", Field.minute)
    Traceback (most recent call last):
    ...
    cronparser.CronSyntaxError: Invalid range: '5-1'
    """
    values = []
    for part in token.split(','):
        if '-' in part:
            start, end = parse_range(part, field)
            if start > end:
                raise CronSyntaxError("Invalid range", part)
            # past the field's max only the end is kept, for the validator
            values.extend(range(start, min(end, field.max) + 1))
            if end > field.max:
                values.append(end)
        else:
            values.append(parse_number(part, field))
    return values


def parse_range(text, field):
    bounds = text.split('-')
    if len(bounds) != 2:
        raise CronSyntaxError("Invalid range", text)
    return tuple(parse_number(bound, field) for bound in bounds)


def parse_number(text, field):
    """
    Parses a number, or a month or week day name for the fields that have
    them.
    >>> parse_number("07", Field.minute)
    7
    >>> parse_number("Feb", Field.month)
    2
    >>> parse_number("Feb", Field.hour)
    Traceback (most recent call last):
    ...
    cronparser.CronSyntaxError: Invalid number: 'Feb'
    """
    if _NUMBER.fullmatch(text):
        return int(text)
    name = text.upper()
    if name in field.names:
        return field.names.index(name) + field.min
    raise CronSyntaxError("Invalid number", text)


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
