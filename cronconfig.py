"""
Options a host passes to the editor. Both the snake_case names used here
and the camelCase names common in front-end code are accepted.
>>> config = make_config(clearButtonAction='empty', allowEmpty='never')
>>> config.clear_button_action is ClearAction.empty
True
>>> config.allow_empty is AllowEmpty.never
True
>>> sorted(make_config(shortcuts=['@daily']).shortcuts)
['@daily']
"""

from collections import namedtuple
from enum import Enum

from cronlocale import DEFAULT_LOCALE, make_locale
from cronmodel import Period, SHORTCUTS, DEFAULT_SHORTCUTS


class ClearAction(Enum):
    reset = 'reset'
    empty = 'empty'


class AllowEmpty(Enum):
    never = 'never'
    always = 'always'
    for_default_value = 'for-default-value'


class ClockFormat(Enum):
    h24 = '24-hour-clock'
    h12 = '12-hour-clock'


Config = namedtuple('Config', (
    'clear_button_action',
    'allow_empty',
    'shortcuts',
    'read_only',
    'disabled',
    'default_period',
    'humanize_labels',
    'humanize_value',
    'leading_zero',
    'clock_format',
    'locale',
), defaults=(
    ClearAction.reset,
    AllowEmpty.for_default_value,
    DEFAULT_SHORTCUTS,
    False,
    False,
    Period.day,
    True,
    False,
    False,
    None,
    DEFAULT_LOCALE,
))

_ALIASES = {
    'clearButtonAction': 'clear_button_action',
    'allowEmpty': 'allow_empty',
    'readOnly': 'read_only',
    'defaultPeriod': 'default_period',
    'humanizeLabels': 'humanize_labels',
    'humanizeValue': 'humanize_value',
    'leadingZero': 'leading_zero',
    'clockFormat': 'clock_format',
}


def resolve_shortcuts(shortcuts):
    """
    Turns the shortcuts option into the set of enabled tokens.
    >>> resolve_shortcuts(False)
    frozenset()
    >>> '@reboot' in resolve_shortcuts(True)
    True
    >>> '@reboot' in resolve_shortcuts(DEFAULT_SHORTCUTS)
    False
    >>> resolve_shortcuts(['@often'])
    Traceback (most recent call last):
    ...
    ValueError: unknown shortcut: @often
    """
    if shortcuts is True:
        return frozenset(SHORTCUTS)
    if not shortcuts:
        return frozenset()
    if isinstance(shortcuts, str):
        shortcuts = (shortcuts,)
    tokens = frozenset(token.lower() for token in shortcuts)
    for token in sorted(tokens):
        if token not in SHORTCUTS:
            raise ValueError("unknown shortcut: {}".format(token))
    return tokens


def make_config(base=None, **options):
    """
    Builds a Config from a base (a Config, a mapping or None) and keyword
    overrides, coercing plain strings to the option enums.
    >>> make_config(readOnly=True).read_only
    True
    >>> make_config(make_config(disabled=True)).disabled
    True
    >>> make_config(colour='red')
    Traceback (most recent call last):
    ...
    ValueError: unknown option: colour
    """
    if base is None:
        merged = {}
    elif isinstance(base, Config):
        merged = base._asdict()
    else:
        merged = dict(base)
    merged.update(options)

    settings = {}
    for key, value in merged.items():
        name = _ALIASES.get(key, key)
        if name not in Config._fields:
            raise ValueError("unknown option: {}".format(key))
        settings[name] = value

    if 'clear_button_action' in settings:
        settings['clear_button_action'] = ClearAction(
            settings['clear_button_action'])
    if 'allow_empty' in settings:
        settings['allow_empty'] = AllowEmpty(settings['allow_empty'])
    if 'shortcuts' in settings:
        settings['shortcuts'] = resolve_shortcuts(settings['shortcuts'])
    if 'default_period' in settings:
        settings['default_period'] = Period(settings['default_period'])
    if settings.get('clock_format') is not None:
        settings['clock_format'] = ClockFormat(settings['clock_format'])
    if 'locale' in settings and settings['locale'] is not DEFAULT_LOCALE:
        settings['locale'] = make_locale(settings['locale'])
    return Config(**settings)


DEFAULT_CONFIG = make_config()


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
