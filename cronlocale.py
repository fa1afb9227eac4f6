"""
Texts shown next to the cron selectors. Hosts can replace any of them
through make_locale.
>>> make_locale({'everyText': 'chaque'})['everyText']
'chaque'
>>> make_locale()['emptyMonths']
'every month'
"""

MONTH_NAMES = ('JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
               'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC')
DAY_NAMES = ('SUN', 'MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT')

DEFAULT_LOCALE = {
    'everyText': 'every',
    'emptyMonths': 'every month',
    'emptyMonthDays': 'every day of the month',
    'emptyWeekDays': 'every day of the week',
    'emptyHours': 'every hour',
    'emptyMinutes': 'every minute',
    'errorInvalidCron': 'Invalid cron expression',
    'minuteOption': 'minute',
    'hourOption': 'hour',
    'dayOption': 'day',
    'monthOption': 'month',
    'yearOption': 'year',
    'altWeekDays': DAY_NAMES,
    'altMonths': MONTH_NAMES,
}


def make_locale(overrides=None):
    """
    Returns a copy of the default locale with overrides applied. Keys the
    default locale doesn't know about are rejected so typos don't go
    unnoticed.
    >>> make_locale({'everyTxt': 'x'})
    Traceback (most recent call last):
    ...
    ValueError: unknown locale key: everyTxt
    """
    locale = dict(DEFAULT_LOCALE)
    for key, text in (overrides or {}).items():
        if key not in DEFAULT_LOCALE:
            raise ValueError("unknown locale key: {}".format(key))
        locale[key] = tuple(text) if isinstance(text, list) else text
    return locale


def period_label(period, locale=DEFAULT_LOCALE):
    return locale['{}Option'.format(period.value)]


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
