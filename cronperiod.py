"""
Works out which granularity an expression is being edited at. The period
decides which selectors are offered as custom and which are held at
"every ...".
>>> from cronparser import parse_expression
>>> infer_period(parse_expression("1,4 * * * *")).value
'minute'
>>> infer_period(parse_expression("1 1 1 1 1")).value
'year'
"""

from cronmodel import Field, Period


def infer_period(expression):
    """
    Returns the period of the coarsest field that isn't a wildcard.
    Shortcuts carry their own period.
    >>> from cronparser import parse_expression
    >>> infer_period(parse_expression("0 * * * 1-5")).value
    'day'
    >>> infer_period(parse_expression("*/5 3 * * *")).value
    'hour'
    >>> infer_period(parse_expression("@reboot", shortcuts=True)).value
    'day'
    """
    if expression.is_shortcut:
        return expression.period
    if not expression.month.is_wildcard:
        return Period.year
    if not (expression.dom.is_wildcard and expression.dow.is_wildcard):
        return Period.day
    if not expression.hour.is_wildcard:
        return Period.hour
    return Period.minute


def editable_fields(period):
    """
    Fields a user can customise at period; every other field is held at
    its wildcard.
    >>> [field.name for field in editable_fields(Period.hour)]
    ['minute', 'hour']
    >>> [field.name for field in editable_fields(Period.month)]
    ['minute', 'hour', 'dom', 'dow']
    """
    return tuple(field for field in Field if field.period <= period)


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
