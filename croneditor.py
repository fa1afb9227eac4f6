"""
Edit handling for a cron value: the clear action, the empty value policy
and validity reporting.

CronController holds the rules and never calls back into the host: every
operation takes a CronState and returns the next one. CronEditor owns the
current state and passes each new one to the host's set_value and on_error
callbacks, in that order.
>>> calls = []
>>> editor = CronEditor('1 1 1 1 1', set_value=lambda *args: calls.append(args))
>>> editor.clear().value
'* * * * *'
>>> calls
[('* * * * *', {'selectedPeriod': 'year'})]
"""

import logging
from collections import namedtuple

from cronconfig import ClearAction, AllowEmpty, make_config
from cronmodel import (
    Field, Period, Wildcard, Discrete, Step, CronExpression, Shortcut)
from cronparser import CronError, CronSyntaxError, parse_expression, parse_field
from cronperiod import infer_period, editable_fields
from cronserializer import apply_period, serialize
from cronvalidator import validate


logger = logging.getLogger(__name__)

INVALID_CRON = 'invalid_cron'

CronState = namedtuple('CronState', ('value', 'expression', 'period', 'error'))


class CronController:

    """
    Applies edits to a CronState. default_value is the value the editor
    was first created with, which the for-default-value empty policy
    looks at.
    """

    def __init__(self, config=None, default_value=''):
        self.config = make_config(config)
        self.default_value = default_value

    def invalid_cron(self):
        return {'type': INVALID_CRON,
                'description': self.config.locale['errorInvalidCron']}

    def empty_allowed(self):
        policy = self.config.allow_empty
        if policy is AllowEmpty.always:
            return True
        if policy is AllowEmpty.never:
            return False
        return not self.default_value.strip()

    def blank(self):
        return CronState('', CronExpression.wildcard(),
                         self.config.default_period, None)

    def load(self, value, previous=None):
        """
        Reads a value handed in by the host. When it can't be used, the
        previous expression and period stay on display.
        >>> controller = CronController()
        >>> state = controller.load('*/2 * * * *')
        >>> state.expression, state.period.value, state.error
        (CronExpression('*/2 * * * *'), 'minute', None)
        >>> broken = controller.load('*/2 * * *', state)
        >>> broken.expression, broken.error['type']
        (CronExpression('*/2 * * * *'), 'invalid_cron')
        """
        if previous is None:
            previous = self.blank()
        if not value.strip():
            error = None if self.empty_allowed() else self.invalid_cron()
            return CronState(value, CronExpression.wildcard(),
                             self.config.default_period, error)
        try:
            expression = validate(parse_expression(value,
                                                   self.config.shortcuts))
        except CronError as e:
            logger.debug("Rejected cron value %r: %s", value, e)
            return CronState(value, previous.expression, previous.period,
                             self.invalid_cron())
        return CronState(value, expression, infer_period(expression), None)

    def clear(self, state):
        """
        Replaces the value with "* * * * *" or with the empty string,
        depending on clear_button_action. The period stays what it was
        before clearing. A cleared empty value is only an error when
        allow_empty is never.
        >>> controller = CronController({'clear_button_action': 'empty'})
        >>> controller.clear(controller.load('5 * * * *')).error is None
        True
        """
        if self.config.clear_button_action is ClearAction.empty:
            value = ''
            error = (self.invalid_cron()
                     if self.config.allow_empty is AllowEmpty.never else None)
        else:
            value = serialize(CronExpression.wildcard(), state.period)
            error = None
        return CronState(value, CronExpression.wildcard(), state.period,
                         error)

    def fields_of(self, state):
        """The five field expression an edit of state starts from."""
        expression = state.expression
        if not expression.is_shortcut:
            return expression
        if expression.expansion is None:
            return CronExpression.wildcard()
        return parse_expression(expression.expansion, shortcuts=False)

    def commit(self, expression, period):
        """
        Writes expression back as text. Fields coarser than period are
        written as "*" and not validated, but the state keeps them so that
        switching back to a coarser period brings them back.
        """
        value = serialize(expression, period, self.config.humanize_value)
        try:
            validate(apply_period(expression, period))
        except CronError as e:
            logger.debug("Edit produced an invalid value %r: %s", value, e)
            return CronState(value, expression, period, self.invalid_cron())
        return CronState(value, expression, period, None)

    def change_field(self, state, field, field_value):
        return self.commit(self.fields_of(state).replace(field, field_value),
                           state.period)

    def toggle_value(self, state, field, number):
        """
        Adds number to the field, or takes it out when it's already there.
        Taking out the last number leaves the field as a wildcard.
        >>> controller = CronController()
        >>> state = controller.load('1,4 * * * *')
        >>> controller.toggle_value(state, Field.minute, 59).value
        '1,4,59 * * * *'
        >>> controller.toggle_value(state, Field.minute, 4).value
        '1 * * * *'
        """
        number = field.normalize(number)
        current = self.fields_of(state)[field]
        if isinstance(current, Discrete):
            if number in current.values:
                remaining = [v for v in current.values if v != number]
                value = (Discrete(field, remaining) if remaining
                         else Wildcard(field))
            else:
                value = Discrete(field, current.values + (number,))
        else:
            value = Discrete(field, (number,))
        return self.change_field(state, field, value)

    def select_every(self, state, field, interval):
        """
        Makes the field run every interval, as a double click on a number
        does.
        >>> controller = CronController()
        >>> state = controller.load('1,4 * * * *')
        >>> controller.select_every(state, Field.minute, 2).value
        '*/2 * * * *'
        """
        return self.change_field(state, field, Step(field, interval))

    def change_token(self, state, field, text):
        """
        Replaces one field with text typed by the user. Text that doesn't
        parse still goes out as the new value, flagged invalid.
        >>> controller = CronController()
        >>> state = controller.load('0 * * * *')
        >>> changed = controller.change_token(state, Field.hour, '9-x')
        >>> changed.value, changed.error['type']
        ('0 9-x * * *', 'invalid_cron')
        """
        try:
            field_value = parse_field(text, field)
        except CronSyntaxError as e:
            logger.debug("Rejected %s text %r: %s", field.title, text, e)
            tokens = serialize(self.fields_of(state), state.period,
                               self.config.humanize_value).split()
            tokens[field.position] = text
            return CronState(' '.join(tokens), state.expression,
                             state.period, self.invalid_cron())
        return self.change_field(state, field, field_value)

    def change_period(self, state, period):
        """
        Switches the period being edited. Fields coarser than the new
        period are written as wildcards, and come back when a coarser
        period is picked again.
        >>> controller = CronController()
        >>> state = controller.load('0 12 1 6 *')
        >>> state = controller.change_period(state, Period.hour)
        >>> state.value
        '0 12 * * *'
        >>> controller.change_period(state, Period.year).value
        '0 12 1 6 *'
        """
        return self.commit(self.fields_of(state), period)

    def select_shortcut(self, state, token):
        token = token.lower()
        if token not in self.config.shortcuts:
            logger.debug("Shortcut %r isn't enabled", token)
            return CronState(token, state.expression, state.period,
                             self.invalid_cron())
        shortcut = Shortcut(token)
        return CronState(shortcut.token, shortcut, shortcut.period, None)


class CronEditor:

    """
    Host facing editor. set_value(value, {'selectedPeriod': period}) is
    called with every value an interaction produces, then on_error with
    either an invalid_cron report or None. A read-only or disabled editor
    ignores interactions.
    >>> errors = []
    >>> editor = CronEditor('1 1 1 1 1', on_error=errors.append,
    ...                     clearButtonAction='empty', allowEmpty='never')
    >>> editor.clear().value
    ''
    >>> errors[-1]
    {'type': 'invalid_cron', 'description': 'Invalid cron expression'}
    """

    def __init__(self, value='', set_value=None, on_error=None, config=None,
                 **options):
        self.config = make_config(config, **options)
        self.controller = CronController(self.config, default_value=value)
        self.set_value = set_value
        self.on_error = on_error
        self.state = self.controller.load(value)
        self._report_error()

    @property
    def value(self):
        return self.state.value

    @property
    def expression(self):
        return self.state.expression

    @property
    def period(self):
        return self.state.period

    @property
    def error(self):
        return self.state.error

    @property
    def interactive(self):
        return not (self.config.read_only or self.config.disabled)

    @property
    def editable_fields(self):
        return editable_fields(self.state.period)

    def label(self, field):
        """
        >>> CronEditor('*/2 * * * 1,5').label('day-of-week')
        'MON,FRI'
        """
        field = Field.lookup(field)
        clock_format = self.config.clock_format
        shown = apply_period(self.controller.fields_of(self.state),
                             self.state.period)
        return shown[field].label(
            self.config.locale, self.config.humanize_labels,
            self.config.leading_zero,
            clock_format.value if clock_format is not None else None)

    def labels(self):
        return {field.title: self.label(field) for field in Field}

    def update_value(self, value):
        """Takes a new value from the host."""
        if value == self.state.value:
            return self.state
        self.state = self.controller.load(value, self.state)
        self._report_error()
        return self.state

    def clear(self):
        return self._interact(self.controller.clear)

    def toggle(self, field, number):
        return self._interact(self.controller.toggle_value,
                              Field.lookup(field), number)

    def select_every(self, field, interval):
        return self._interact(self.controller.select_every,
                              Field.lookup(field), interval)

    def set_field(self, field, value):
        """
        Sets a field from a field value or from its raw text.
        """
        field = Field.lookup(field)
        if isinstance(value, str):
            return self._interact(self.controller.change_token, field, value)
        return self._interact(self.controller.change_field, field, value)

    def set_period(self, period):
        return self._interact(self.controller.change_period, Period(period))

    def select_shortcut(self, token):
        return self._interact(self.controller.select_shortcut, token)

    def _interact(self, action, *args):
        if not self.interactive:
            logger.debug("Ignoring %s on a read-only editor", action.__name__)
            return None
        self.state = action(self.state, *args)
        if self.set_value is not None:
            self.set_value(self.state.value,
                           {'selectedPeriod': self.state.period.value})
        self._report_error()
        return self.state

    def _report_error(self):
        if self.on_error is not None:
            self.on_error(self.state.error)


if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)
