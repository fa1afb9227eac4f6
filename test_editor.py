import io
import unittest
import doctest
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

import cronedit
import croneditor
from cronconfig import AllowEmpty, ClearAction, make_config
from croneditor import CronController, CronEditor, CronState
from cronmodel import (
    Field, Period, Wildcard, Discrete, Step, Shortcut)


INVALID = {'type': 'invalid_cron', 'description': 'Invalid cron expression'}


class TestDoctests(unittest.TestCase):

    def test_doctests(self):
        for module in (croneditor, cronedit):
            with self.subTest(module=module.__name__):
                results = doctest.testmod(module,
                                          optionflags=doctest.ELLIPSIS)
                self.assertEqual(results.failed, 0)


class TestController(unittest.TestCase):

    def test_load(self):
        state = CronController().load('1,4 * * * *')
        self.assertEqual(state.value, '1,4 * * * *')
        self.assertEqual(state.expression.minute,
                         Discrete(Field.minute, (1, 4)))
        self.assertIs(state.period, Period.minute)
        self.assertIsNone(state.error)

    def test_load_range_error(self):
        controller = CronController()
        previous = controller.load('0 12 * * *')
        state = controller.load('0 25 * * *', previous)
        self.assertEqual(state.value, '0 25 * * *')
        self.assertEqual(state.error, INVALID)
        self.assertEqual(state.expression, previous.expression)
        self.assertIs(state.period, Period.hour)

    def test_load_empty(self):
        self.assertIsNone(CronController().load('').error)
        never = CronController(make_config(allow_empty='never'))
        state = never.load('')
        self.assertEqual(state.error, INVALID)
        self.assertIs(state.period, Period.day)
        self.assertEqual(str(state.expression), '* * * * *')

    def test_empty_for_default_value(self):
        self.assertTrue(CronController(default_value='').empty_allowed())
        self.assertFalse(
            CronController(default_value='* * * * *').empty_allowed())
        always = make_config(allow_empty=AllowEmpty.always)
        self.assertTrue(
            CronController(always, default_value='* * * * *').empty_allowed())

    def test_default_period(self):
        controller = CronController(make_config(defaultPeriod='hour'))
        self.assertIs(controller.load('').period, Period.hour)

    def test_shortcut(self):
        controller = CronController(make_config(shortcuts=True))
        state = controller.load('@reboot')
        self.assertEqual(state.expression, Shortcut('@reboot'))
        self.assertIs(state.period, Period.day)
        self.assertIsNone(state.error)

    def test_clear_reset(self):
        controller = CronController()
        state = controller.clear(controller.load('1 1 1 1 1'))
        self.assertEqual(state.value, '* * * * *')
        self.assertIs(state.period, Period.year)
        self.assertIsNone(state.error)

    def test_clear_is_idempotent(self):
        for action in ClearAction:
            with self.subTest(action=action):
                controller = CronController(
                    make_config(clear_button_action=action,
                                allow_empty='always'))
                once = controller.clear(controller.load('1 1 1 1 1'))
                twice = controller.clear(once)
                self.assertEqual(once.value, twice.value)
                self.assertEqual(once.error, twice.error)

    def test_toggle(self):
        controller = CronController()
        state = controller.load('* * * * *')
        state = controller.toggle_value(state, Field.minute, 5)
        self.assertEqual(state.value, '5 * * * *')
        state = controller.toggle_value(state, Field.minute, 5)
        self.assertEqual(state.value, '* * * * *')
        self.assertTrue(state.expression.minute.is_wildcard)

    def test_toggle_replaces_a_step(self):
        controller = CronController()
        state = controller.toggle_value(controller.load('*/2 * * * *'),
                                        Field.minute, 3)
        self.assertEqual(state.value, '3 * * * *')

    def test_toggle_sunday(self):
        controller = CronController()
        state = controller.change_period(controller.load(''), Period.day)
        state = controller.toggle_value(state, Field.dow, 7)
        self.assertEqual(state.value, '* * * * 0')
        state = controller.toggle_value(state, Field.dow, 0)
        self.assertEqual(state.value, '* * * * *')

    def test_select_every(self):
        controller = CronController()
        state = controller.select_every(controller.load('*/2 * * * *'),
                                        Field.minute, 4)
        self.assertEqual(state.value, '*/4 * * * *')
        self.assertIsInstance(state.expression.minute, Step)

    def test_select_every_zero(self):
        controller = CronController()
        state = controller.select_every(controller.load('* * * * *'),
                                        Field.minute, 0)
        self.assertEqual(state.value, '*/0 * * * *')
        self.assertEqual(state.error, INVALID)
        state = controller.select_every(state, Field.minute, 3)
        self.assertIsNone(state.error)

    def test_edit_keeps_period(self):
        controller = CronController()
        state = controller.change_period(controller.load('* * * * *'),
                                         Period.year)
        self.assertEqual(state.value, '* * * * *')
        self.assertIs(state.period, Period.year)
        state = controller.toggle_value(state, Field.month, 3)
        self.assertEqual(state.value, '* * * 3 *')
        self.assertIs(state.period, Period.year)

    def test_edit_above_period_is_written_as_wildcard(self):
        controller = CronController()
        state = controller.toggle_value(controller.load('* * * * *'),
                                        Field.month, 3)
        self.assertEqual(state.value, '* * * * *')
        self.assertIsNone(state.error)
        self.assertEqual(state.expression.month, Discrete(Field.month, (3,)))

    def test_change_period_to_finer_and_back(self):
        controller = CronController()
        state = controller.load('0 12 1 6 *')
        finer = controller.change_period(state, Period.hour)
        self.assertEqual(finer.value, '0 12 * * *')
        back = controller.change_period(finer, Period.year)
        self.assertEqual(back.value, '0 12 1 6 *')
        self.assertIsNone(back.error)

    def test_hidden_fields_survive_edits(self):
        controller = CronController()
        state = controller.change_period(controller.load('0 12 1 6 *'),
                                         Period.hour)
        state = controller.toggle_value(state, Field.minute, 30)
        self.assertEqual(state.value, '0,30 12 * * *')
        back = controller.change_period(state, Period.year)
        self.assertEqual(back.value, '0,30 12 1 6 *')

    def test_hidden_fields_are_not_validated(self):
        controller = CronController()
        state = controller.load('0 12 1 6 *')
        state = controller.change_field(state, Field.month,
                                        Discrete(Field.month, (13,)))
        self.assertEqual(state.error, INVALID)
        finer = controller.change_period(state, Period.day)
        self.assertEqual(finer.value, '0 12 1 * *')
        self.assertIsNone(finer.error)
        self.assertEqual(controller.change_period(finer, Period.year).error,
                         INVALID)

    def test_huge_range_is_invalid(self):
        controller = CronController()
        previous = controller.load('0 * * * *')
        state = controller.load('0-999999999 * * * *', previous)
        self.assertEqual(state.error, INVALID)
        self.assertEqual(state.expression, previous.expression)
        state = controller.change_token(previous, Field.minute,
                                        '0-999999999')
        self.assertEqual(state.value, '0-59,999999999 * * * *')
        self.assertEqual(state.error, INVALID)

    def test_change_token(self):
        controller = CronController()
        state = controller.change_token(controller.load('0 0 * * *'),
                                        Field.hour, '9-17')
        self.assertEqual(state.value, '0 9-17 * * *')
        self.assertIsNone(state.error)
        state = controller.change_token(state, Field.minute, '75')
        self.assertEqual(state.value, '75 9-17 * * *')
        self.assertEqual(state.error, INVALID)

    def test_edit_a_shortcut(self):
        controller = CronController()
        state = controller.load('@daily')
        self.assertIs(state.period, Period.day)
        state = controller.toggle_value(state, Field.hour, 6)
        self.assertEqual(state.value, '0 0,6 * * *')

    def test_edit_reboot(self):
        controller = CronController(make_config(shortcuts=True))
        state = controller.select_every(controller.load('@reboot'),
                                        Field.hour, 2)
        self.assertEqual(state.value, '* */2 * * *')

    def test_select_shortcut(self):
        controller = CronController()
        state = controller.select_shortcut(controller.load('* * * * *'),
                                           '@weekly')
        self.assertEqual(state.value, '@weekly')
        self.assertIs(state.period, Period.day)
        refused = controller.select_shortcut(state, '@reboot')
        self.assertEqual(refused.error, INVALID)
        self.assertEqual(refused.expression, Shortcut('@weekly'))

    def test_humanize_value(self):
        controller = CronController(make_config(humanize_value=True))
        state = controller.toggle_value(controller.load('0 0 * * 1'),
                                        Field.dow, 5)
        self.assertEqual(state.value, '0 0 * * MON,FRI')

    def test_discrete_and_step_are_not_normalized(self):
        controller = CronController()
        evens = ','.join(str(n) for n in range(0, 60, 2))
        state = controller.load(evens + ' * * * *')
        state = controller.change_period(state, Period.minute)
        self.assertEqual(state.value, evens + ' * * * *')
        self.assertIsInstance(state.expression.minute, Discrete)
        state = controller.select_every(state, Field.minute, 2)
        self.assertEqual(state.value, '*/2 * * * *')


class TestEditor(unittest.TestCase):

    def make(self, value, **options):
        set_value = mock.Mock()
        on_error = mock.Mock()
        editor = CronEditor(value, set_value, on_error, **options)
        set_value.reset_mock()
        on_error.reset_mock()
        return editor, set_value, on_error

    def test_all_wildcards(self):
        editor, _, _ = self.make('* * * * *')
        self.assertIs(editor.period, Period.minute)
        for label in editor.labels().values():
            self.assertTrue(label.startswith('every '))

    def test_period_minute_to_year(self):
        editor, set_value, _ = self.make('* * * * *')
        editor.set_period('year')
        set_value.assert_called_once_with('* * * * *',
                                          {'selectedPeriod': 'year'})
        self.assertEqual(editor.labels(), {
            'minute': 'every minute',
            'hour': 'every hour',
            'day-of-month': 'every day of the month',
            'month': 'every month',
            'day-of-week': 'every day of the week',
        })
        self.assertEqual(editor.editable_fields, tuple(Field))

    def test_add_a_minute(self):
        editor, set_value, on_error = self.make('1,4 * * * *')
        editor.toggle('minute', 59)
        set_value.assert_called_once_with('1,4,59 * * * *',
                                          {'selectedPeriod': 'minute'})
        on_error.assert_called_once_with(None)
        self.assertEqual(editor.label(Field.minute), '1,4,59')

    def test_double_click_selects_every(self):
        editor, set_value, _ = self.make('1,4 * * * *')
        editor.select_every('minute', 2)
        self.assertEqual(editor.expression.minute, Step(Field.minute, 2))
        self.assertIsNone(editor.expression.minute.start)
        self.assertEqual(editor.label('minute'), 'every 2')
        set_value.assert_called_once_with('*/2 * * * *',
                                          {'selectedPeriod': 'minute'})

    def test_double_click_changes_every(self):
        editor, _, _ = self.make('*/2 * * * *')
        self.assertEqual(editor.label('minute'), 'every 2')
        editor.select_every('minute', 4)
        self.assertEqual(editor.label('minute'), 'every 4')
        self.assertEqual(editor.value, '*/4 * * * *')

    def test_clear(self):
        editor, set_value, on_error = self.make('1 1 1 1 1')
        editor.clear()
        set_value.assert_called_once_with('* * * * *',
                                          {'selectedPeriod': 'year'})
        on_error.assert_called_once_with(None)

    def test_clear_empty(self):
        editor, set_value, on_error = self.make('1 1 1 1 1',
                                                clearButtonAction='empty')
        editor.clear()
        set_value.assert_called_once_with('', {'selectedPeriod': 'year'})
        on_error.assert_called_once_with(None)
        self.assertIsNone(editor.error)

    def test_clear_empty_with_empty_default(self):
        editor, set_value, on_error = self.make('', clearButtonAction='empty')
        editor.toggle('minute', 5)
        on_error.reset_mock()
        editor.clear()
        on_error.assert_called_once_with(None)

    def test_huge_range_is_reported(self):
        errors = []
        editor = CronEditor('0-999999999 * * * *', on_error=errors.append)
        self.assertEqual(errors, [INVALID])
        editor.update_value('0 * * * *')
        self.assertEqual(errors[-1], None)
        editor.set_field('minute', '0-999999999')
        self.assertEqual(errors[-1], INVALID)

    def test_hidden_fields_show_every(self):
        editor, _, _ = self.make('0 12 1 6 *')
        editor.set_period('hour')
        self.assertEqual(editor.label('month'), 'every month')
        self.assertEqual(editor.label('hour'), '12')
        editor.set_period('year')
        self.assertEqual(editor.value, '0 12 1 6 *')
        self.assertEqual(editor.label('month'), 'JUN')

    def test_clear_empty_never(self):
        editor, set_value, on_error = self.make(
            '1 1 1 1 1', clearButtonAction='empty', allowEmpty='never')
        editor.clear()
        set_value.assert_called_once_with('', {'selectedPeriod': 'year'})
        on_error.assert_called_once_with(INVALID)

    def test_clear_empty_always(self):
        editor, set_value, on_error = self.make(
            '1 1 1 1 1', clearButtonAction='empty', allowEmpty='always')
        editor.clear()
        set_value.assert_called_once_with('', {'selectedPeriod': 'year'})
        on_error.assert_called_once_with(None)

    def test_clear_reboot(self):
        editor, set_value, _ = self.make('@reboot', shortcuts=True)
        editor.clear()
        set_value.assert_called_once_with('* * * * *',
                                          {'selectedPeriod': 'day'})

    def test_clear_twice(self):
        editor, set_value, _ = self.make('1 1 1 1 1')
        editor.clear()
        editor.clear()
        self.assertEqual(set_value.call_args_list, [
            mock.call('* * * * *', {'selectedPeriod': 'year'}),
            mock.call('* * * * *', {'selectedPeriod': 'year'}),
        ])

    def test_value_is_notified_before_error(self):
        calls = []
        editor = CronEditor(
            '1 1 1 1 1',
            set_value=lambda value, meta: calls.append(('set_value', value)),
            on_error=lambda error: calls.append(('on_error', error)),
            clear_button_action='empty', allow_empty='never')
        del calls[:]
        editor.clear()
        self.assertEqual(calls, [('set_value', ''), ('on_error', INVALID)])

    def test_read_only_and_disabled(self):
        for option in ('readOnly', 'disabled'):
            with self.subTest(option=option):
                editor, set_value, on_error = self.make(
                    '1,4 * * * *', **{option: True})
                before = editor.state
                self.assertIsNone(editor.toggle('minute', 59))
                self.assertIsNone(editor.select_every('minute', 2))
                self.assertIsNone(editor.clear())
                self.assertIsNone(editor.set_period('year'))
                self.assertIsNone(editor.set_field('hour', '3'))
                self.assertIsNone(editor.select_shortcut('@daily'))
                set_value.assert_not_called()
                on_error.assert_not_called()
                self.assertIs(editor.state, before)
                self.assertEqual(editor.label('minute'), '1,4')

    def test_initial_error_is_reported(self):
        on_error = mock.Mock()
        CronEditor('not cron', on_error=on_error)
        on_error.assert_called_once_with(INVALID)

    def test_update_value(self):
        editor, set_value, on_error = self.make('* * * * *')
        editor.update_value('0 0 * * *')
        self.assertIs(editor.period, Period.hour)
        on_error.assert_called_once_with(None)
        editor.update_value('0 0 * *')
        on_error.assert_called_with(INVALID)
        self.assertEqual(str(editor.expression), '0 0 * * *')
        editor.update_value('0 0 * * 1')
        on_error.assert_called_with(None)
        set_value.assert_not_called()

    def test_update_value_echo_is_ignored(self):
        editor, _, on_error = self.make('* * * * *')
        editor.toggle('minute', 1)
        on_error.reset_mock()
        editor.update_value('1 * * * *')
        on_error.assert_not_called()

    def test_set_field(self):
        editor, set_value, on_error = self.make('0 0 * * *')
        editor.set_field('hour', Discrete(Field.hour, (6, 18)))
        self.assertEqual(editor.value, '0 6,18 * * *')
        editor.set_field(Field.minute, '*/15')
        self.assertEqual(editor.value, '*/15 6,18 * * *')
        editor.set_field('minute', 'nope')
        self.assertEqual(editor.value, 'nope 6,18 * * *')
        on_error.assert_called_with(INVALID)
        editor.set_field('minute', Wildcard(Field.minute))
        on_error.assert_called_with(None)

    def test_no_callbacks(self):
        editor = CronEditor('1 * * * *')
        state = editor.toggle(Field.minute, 2)
        self.assertEqual(state, CronState('1,2 * * * *', state.expression,
                                          Period.minute, None))

    def test_labels_use_config(self):
        editor = CronEditor('5 13 * 2 *', clockFormat='12-hour-clock',
                            leadingZero=True, humanizeLabels=False,
                            locale={'emptyMonthDays': 'tous les jours'})
        self.assertEqual(editor.labels(), {
            'minute': '05',
            'hour': '01PM',
            'day-of-month': 'tous les jours',
            'month': '02',
            'day-of-week': 'every day of the week',
        })

    def test_shortcut_labels(self):
        editor = CronEditor('@hourly')
        self.assertEqual(editor.label('minute'), '0')
        self.assertEqual(editor.label('hour'), 'every hour')

    def test_bad_options(self):
        self.assertRaises(ValueError, CronEditor, '* * * * *',
                          clearButtonAction='wipe')
        self.assertRaises(ValueError, CronEditor, '* * * * *',
                          shortcuts=['@never'])


class TestCommandLine(unittest.TestCase):

    def run_main(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = cronedit.main(list(argv))
        return status, out.getvalue().splitlines(), err.getvalue()

    def test_describe(self):
        status, lines, _ = self.run_main('4,1 */2 * * *')
        self.assertEqual(status, 0)
        self.assertIn('minute: 1,4', lines)
        self.assertIn('hour: every 2', lines)
        self.assertEqual(lines[-2:], ['period: hour', 'value: 1,4 */2 * * *'])

    def test_invalid(self):
        status, lines, err = self.run_main('61 * * * *')
        self.assertEqual(status, 1)
        self.assertIn('Invalid cron expression', err)
        self.assertIn('value: 61 * * * *', lines)

    def test_clear(self):
        status, lines, _ = self.run_main('1 1 1 1 1', '--clear')
        self.assertEqual(status, 0)
        self.assertEqual(lines[-2:], ['period: year', 'value: * * * * *'])
        status, _, err = self.run_main('1 1 1 1 1', '--clear',
                                       '--clear-action', 'empty',
                                       '--allow-empty', 'never')
        self.assertEqual(status, 1)

    def test_shortcuts(self):
        status, lines, _ = self.run_main('@reboot')
        self.assertEqual(status, 1)
        status, lines, _ = self.run_main('@reboot', '--all-shortcuts')
        self.assertEqual(status, 0)
        self.assertEqual(lines[-2:], ['period: day', 'value: @reboot'])

    def test_bad_period(self):
        with self.assertRaises(SystemExit):
            self.run_main('* * * * *', '--period', 'week')


if __name__ == "__main__":
    unittest.main()
