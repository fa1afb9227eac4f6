"""
Writes an expression back out as cron text for a given period. Fields
coarser than the period always come out as "*".
>>> from cronparser import parse_expression
>>> serialize(parse_expression("5 4 3 2 1"), Period.day)
'5 4 3 * 1'
>>> serialize(parse_expression("1,4,59 * * * *"))
'1,4,59 * * * *'
"""

from cronmodel import Period, Wildcard, CronExpression, DEFAULT_SHORTCUTS
from cronparser import parse_expression
from cronperiod import infer_period


def apply_period(expression, period):
    """
    Returns a copy of expression with every field coarser than period
    replaced by a wildcard. Shortcuts are returned unchanged.
    >>> from cronparser import parse_expression
    >>> apply_period(parse_expression("0 12 * 6 *"), Period.hour)
    CronExpression('0 12 * * *')
    """
    if expression.is_shortcut:
        return expression
    return CronExpression(
        Wildcard(value.field) if value.field.period > period else value
        for value in expression)


def serialize(expression, period=None, humanize=False):
    """
    Returns the canonical text of expression at period, inferring the
    period when none is given. With humanize, months and week days are
    written by name.
    >>> from cronparser import parse_expression
    >>> serialize(parse_expression("0 9 * 1,7 1-5"), humanize=True)
    '0 9 * JAN,JUL MON-FRI'
    >>> serialize(parse_expression("@weekly"), Period.minute)
    '@weekly'
    """
    if expression.is_shortcut:
        return expression.token
    if period is None:
        period = infer_period(expression)
    return ' '.join(format_value(value, humanize)
                    for value in apply_period(expression, period))


def format_value(value, humanize=False):
    if humanize and value.field.names:
        names = value.field.names
        first = value.field.min

        def render(number):
            if 0 <= number - first < len(names):
                return names[number - first]
            return str(number)
        return value.text(render)
    return value.text()


def canonical_form(raw, shortcuts=DEFAULT_SHORTCUTS):
    """
    Parses raw and writes it back at its own period.
    >>> canonical_form(" 4,1   2-3  *  * 0,7")
    '1,4 2,3 * * 0'
    """
    return serialize(parse_expression(raw, shortcuts))


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
