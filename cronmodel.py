"""
Structured form of a cron expression. Every one of the five positions holds
exactly one value: a wildcard, a discrete list of numbers, or a step
sequence. Values are never changed in place; edits build new ones.
>>> expression = CronExpression.wildcard()
>>> str(expression)
'* * * * *'
>>> expression.replace(Field.minute, Discrete(Field.minute, (4, 1)))
CronExpression('1,4 * * * *')
"""

from enum import Enum
from functools import total_ordering

from cronlocale import DEFAULT_LOCALE, MONTH_NAMES, DAY_NAMES


@total_ordering
class Period(Enum):

    """
    Granularity being edited, from finest to coarsest.
    >>> Period.minute < Period.day < Period.year
    True
    >>> max(Period.hour, Period.month).value
    'month'
    """

    minute = 'minute'
    hour = 'hour'
    day = 'day'
    month = 'month'
    year = 'year'

    @property
    def rank(self):
        return list(Period).index(self)

    def __lt__(self, other):
        if self.__class__ is other.__class__:
            return self.rank < other.rank
        return NotImplemented


class Field(Enum):

    """
    The five cron positions, in the order they're written, with their
    legal bounds.
    >>> [field.name for field in Field]
    ['minute', 'hour', 'dom', 'month', 'dow']
    >>> (Field.dom.min, Field.dom.max)
    (1, 31)
    >>> Field.lookup('day-of-week') is Field.dow
    True
    """

    minute = (0, 59)
    hour = (0, 23)
    dom = (1, 31)
    month = (1, 12)
    dow = (0, 7)

    @property
    def min(self):
        return self.value[0]

    @property
    def max(self):
        return self.value[1]

    @property
    def star_max(self):
        # 7 is Sunday again
        return 6 if self is Field.dow else self.max

    @property
    def position(self):
        return list(Field).index(self)

    @property
    def title(self):
        return _FIELD_TITLES[self]

    @property
    def period(self):
        return _FIELD_PERIODS[self]

    @property
    def names(self):
        return _FIELD_NAMES.get(self, ())

    def normalize(self, number):
        if self is Field.dow and number == 7:
            return 0
        return number

    @classmethod
    def lookup(cls, key):
        if isinstance(key, cls):
            return key
        for field in cls:
            if key in (field.name, field.title):
                return field
        raise KeyError(key)


_FIELD_TITLES = {
    Field.minute: 'minute',
    Field.hour: 'hour',
    Field.dom: 'day-of-month',
    Field.month: 'month',
    Field.dow: 'day-of-week',
}

_FIELD_PERIODS = {
    Field.minute: Period.minute,
    Field.hour: Period.hour,
    Field.dom: Period.day,
    Field.dow: Period.day,
    Field.month: Period.year,
}

_FIELD_NAMES = {
    Field.month: MONTH_NAMES,
    Field.dow: DAY_NAMES,
}

_EMPTY_LABELS = {
    Field.minute: 'emptyMinutes',
    Field.hour: 'emptyHours',
    Field.dom: 'emptyMonthDays',
    Field.month: 'emptyMonths',
    Field.dow: 'emptyWeekDays',
}


class FieldValue:

    """
    Base for the three kinds of value a field can hold. Two values are
    equal when they stand for the same numbers of the same field, whatever
    their written form.
    >>> Step(Field.minute, 2) == Discrete(Field.minute, range(0, 60, 2))
    True
    >>> str(Step(Field.minute, 2))
    '*/2'
    """

    is_wildcard = False

    def __init__(self, field):
        self.field = field

    def __str__(self):
        return self.text()

    def __repr__(self):
        return '{}({}:{})'.format(type(self).__name__, self.field.name, self)

    def __eq__(self, other):
        if not isinstance(other, FieldValue):
            return NotImplemented
        return (self.field is other.field
                and set(self.values) == set(other.values))

    def __hash__(self):
        return hash((self.field, frozenset(self.values)))

    def label(self, locale=DEFAULT_LOCALE, humanize=False,
              leading_zero=False, clock_format=None):
        """
        Returns the text a selector shows for this value.
        >>> Wildcard(Field.month).label()
        'every month'
        >>> Discrete(Field.month, (1, 4)).label(humanize=True)
        'JAN,APR'
        >>> Discrete(Field.hour, (0, 13)).label(clock_format='12-hour-clock')
        '12AM,1PM'
        """
        return self.text(_renderer(self.field, locale, humanize,
                                   leading_zero, clock_format))


class Wildcard(FieldValue):

    is_wildcard = True

    @property
    def values(self):
        return tuple(range(self.field.min, self.field.star_max + 1))

    def text(self, render=str):
        return '*'

    def label(self, locale=DEFAULT_LOCALE, humanize=False,
              leading_zero=False, clock_format=None):
        return locale[_EMPTY_LABELS[self.field]]


class Discrete(FieldValue):

    """
    A list of specific numbers. They're kept sorted and without
    duplicates, and runs of three or more are written as a range.
    >>> Discrete(Field.minute, (59, 1, 4, 1))
    Discrete(minute:1,4,59)
    >>> str(Discrete(Field.hour, (1, 2, 3, 4, 9, 10)))
    '1-4,9,10'
    >>> Discrete(Field.dow, (7, 1)).values
    (0, 1)
    """

    def __init__(self, field, values):
        super().__init__(field)
        self.values = tuple(sorted({field.normalize(int(v)) for v in values}))

    def text(self, render=str):
        parts = []
        for run in _runs(self.values):
            if len(run) >= 3:
                parts.append('{}-{}'.format(render(run[0]), render(run[-1])))
            else:
                parts.extend(render(value) for value in run)
        return ','.join(parts)


class Step(FieldValue):

    """
    Every interval-th number, either across the whole field (start is None)
    or between start and end.
    >>> Step(Field.minute, 15).values
    (0, 15, 30, 45)
    >>> Step(Field.hour, 2, 1, 6)
    Step(hour:1-6/2)
    >>> Step(Field.minute, 2).label()
    'every 2'
    """

    def __init__(self, field, interval, start=None, end=None):
        super().__init__(field)
        self.interval = interval
        self.start = start
        self.end = end

    @property
    def values(self):
        if self.interval < 1:
            return ()
        first = self.field.min if self.start is None else self.start
        last = self.field.star_max if self.end is None else self.end
        return tuple(sorted({self.field.normalize(v) for v in
                             range(first, min(last, self.field.max) + 1,
                                   self.interval)}))

    def text(self, render=str):
        if self.start is None:
            return '*/{}'.format(self.interval)
        return '{}-{}/{}'.format(render(self.start), render(self.end),
                                 self.interval)

    def label(self, locale=DEFAULT_LOCALE, humanize=False,
              leading_zero=False, clock_format=None):
        if self.start is None:
            return '{} {}'.format(locale['everyText'], self.interval)
        return super().label(locale, humanize, leading_zero, clock_format)


def _runs(values):
    run = []
    for value in values:
        if run and value != run[-1] + 1:
            yield run
            run = []
        run.append(value)
    if run:
        yield run


def _renderer(field, locale, humanize, leading_zero, clock_format):
    if field is Field.month:
        names = locale['altMonths']
    elif field is Field.dow:
        names = locale['altWeekDays']
    else:
        names = ()
    number_format = '{:02d}' if leading_zero else '{:d}'

    def render(number):
        if humanize and 0 <= number - field.min < len(names):
            return names[number - field.min]
        if (field is Field.hour and clock_format == '12-hour-clock'
                and 0 <= number <= 23):
            return number_format.format(number % 12 or 12) + (
                'AM' if number < 12 else 'PM')
        return number_format.format(number)
    return render


class CronExpression:

    """
    Five field values in cron order.
    >>> expression = CronExpression.wildcard()
    >>> expression.minute.is_wildcard
    True
    >>> expression[Field.dow]
    Wildcard(dow:*)
    """

    is_shortcut = False

    def __init__(self, values):
        values = tuple(values)
        if tuple(value.field for value in values) != tuple(Field):
            raise ValueError("a cron expression needs one value per field")
        self.values = values

    @classmethod
    def wildcard(cls):
        return cls(Wildcard(field) for field in Field)

    def __getitem__(self, field):
        return self.values[field.position]

    def __iter__(self):
        return iter(self.values)

    @property
    def minute(self):
        return self.values[0]

    @property
    def hour(self):
        return self.values[1]

    @property
    def dom(self):
        return self.values[2]

    @property
    def month(self):
        return self.values[3]

    @property
    def dow(self):
        return self.values[4]

    def replace(self, field, value):
        """
        Returns a copy with one field swapped for value.
        >>> CronExpression.wildcard().replace(Field.hour, Step(Field.hour, 6))
        CronExpression('* */6 * * *')
        """
        if value.field is not field:
            raise ValueError("{!r} doesn't belong to {}".format(
                value, field.title))
        values = list(self.values)
        values[field.position] = value
        return CronExpression(values)

    def __str__(self):
        return ' '.join(str(value) for value in self.values)

    def __repr__(self):
        return 'CronExpression({!r})'.format(str(self))

    def __eq__(self, other):
        if not isinstance(other, CronExpression):
            return NotImplemented
        return self.values == other.values

    def __hash__(self):
        return hash(self.values)


SHORTCUTS = {
    '@yearly': (Period.year, '0 0 1 1 *'),
    '@annually': (Period.year, '0 0 1 1 *'),
    '@monthly': (Period.month, '0 0 1 * *'),
    '@weekly': (Period.day, '0 0 * * 0'),
    '@daily': (Period.day, '0 0 * * *'),
    '@midnight': (Period.day, '0 0 * * *'),
    '@hourly': (Period.hour, '0 * * * *'),
    '@reboot': (Period.day, None),
}

DEFAULT_SHORTCUTS = frozenset(token for token in SHORTCUTS
                              if token != '@reboot')


class Shortcut:

    """
    A named token standing for a whole expression. It has no field values;
    its period is fixed and its expansion, when it has one, is the five
    field text it abbreviates.
    >>> Shortcut('@Daily')
    Shortcut('@daily')
    >>> Shortcut('@reboot').period.value
    'day'
    >>> Shortcut('@reboot').expansion is None
    True
    """

    is_shortcut = True

    def __init__(self, token):
        token = token.lower()
        if token not in SHORTCUTS:
            raise ValueError("unknown shortcut: {}".format(token))
        self.token = token
        self.period, self.expansion = SHORTCUTS[token]

    def __str__(self):
        return self.token

    def __repr__(self):
        return 'Shortcut({!r})'.format(self.token)

    def __eq__(self, other):
        if not isinstance(other, Shortcut):
            return NotImplemented
        return self.token == other.token

    def __hash__(self):
        return hash(self.token)


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
