"""
Checks parsed values against the bounds of their field. Nothing is changed;
a problem is raised as a CronRangeError naming the field and the value.
>>> from cronparser import parse_expression
>>> validate(parse_expression("1,4 * * * *"))
CronExpression('1,4 * * * *')
>>> validate(parse_expression("* * 32 * *"))
Traceback (most recent call last):
...
cronvalidator.CronRangeError: day-of-month: 32 is out of range 1-31
"""

from cronmodel import Wildcard, Discrete, Step
from cronparser import CronError


class CronRangeError(CronError):

    def __init__(self, field, value, reason=None):
        if reason is None:
            reason = "{} is out of range {}-{}".format(
                value, field.min, field.max)
        super().__init__("{}: {}".format(field.title, reason))
        self.field = field
        self.value = value


def validate(expression):
    if not expression.is_shortcut:
        for value in expression:
            validate_field(value)
    return expression


def validate_field(value):
    """
    Checks one field value.
    >>> from cronmodel import Field
    >>> validate_field(Step(Field.minute, 0))
    Traceback (most recent call last):
    ...
    cronvalidator.CronRangeError: minute: step 0 must be at least 1
    >>> validate_field(Step(Field.hour, 2, 9, 5))
    Traceback (most recent call last):
    ...
    cronvalidator.CronRangeError: hour: range 9-5 ends before it starts
    >>> validate_field(Discrete(Field.dow, (7,)))
    Discrete(dow:0)
    """
    field = value.field
    if isinstance(value, Step):
        if value.interval < 1:
            raise CronRangeError(field, value.interval,
                                 "step {} must be at least 1".format(
                                     value.interval))
        if value.start is not None:
            _check_bounds(field, value.start)
            _check_bounds(field, value.end)
            if value.start > value.end:
                raise CronRangeError(field, value.end,
                                     "range {}-{} ends before it starts".format(
                                         value.start, value.end))
    elif isinstance(value, Discrete):
        if not value.values:
            raise CronRangeError(field, None, "no value selected")
        for number in value.values:
            _check_bounds(field, number)
    elif not isinstance(value, Wildcard):
        raise TypeError("not a field value: {!r}".format(value))
    return value


def is_valid(expression):
    """
    >>> from cronparser import parse_expression
    >>> is_valid(parse_expression("*/2 0-23 1 12 7"))
    True
    >>> is_valid(parse_expression("* 24 * * *"))
    False
    """
    try:
        validate(expression)
    except CronRangeError:
        return False
    return True


def _check_bounds(field, number):
    if not field.min <= number <= field.max:
        raise CronRangeError(field, number)


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
