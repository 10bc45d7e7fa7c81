import pytest

from focus import FocusCLI
from focusclock import ui
from focusclock.clock import extract_label


@pytest.fixture
def cli(manager):
    return FocusCLI(manager=manager)


def test_flag_message_sets_focus(cli, fake_clock):
    assert cli.run(['-m', 'Deep Work']) == 0
    assert extract_label(fake_clock.value) == 'Deep Work'


def test_positional_message_and_duration(cli, fake_clock, launcher, timer_store):
    assert cli.run(['Read Chapter 5', '30m']) == 0
    assert extract_label(fake_clock.value) == 'Read Chapter 5'
    assert launcher.calls == [('30m', 'Read Chapter 5')]
    assert timer_store.read().label == 'Read Chapter 5'


def test_flags_take_precedence_over_positionals(cli, fake_clock, launcher):
    assert cli.run(['-m', 'Flag', '-t', '5m', 'Positional', '10m']) == 0
    assert extract_label(fake_clock.value) == 'Flag'
    assert launcher.calls == [('5m', 'Flag')]


def test_timer_without_message_is_usage_error(cli, fake_clock):
    assert cli.run(['-t', '25m']) == 1
    assert fake_clock.writes == []


def test_unknown_option_is_usage_error(cli):
    assert cli.run(['-x']) == 1


def test_missing_option_argument_is_usage_error(cli):
    assert cli.run(['-m']) == 1


def test_too_many_positionals_is_usage_error(cli):
    assert cli.run(['a', '1m', 'extra']) == 1


def test_whitespace_message_clears(cli, fake_clock):
    fake_clock.set_label('Old')
    assert cli.run(['-m', '   ']) == 0
    assert fake_clock.value == fake_clock.default_format


def test_clear_takes_precedence_over_status(cli, fake_clock):
    fake_clock.set_label('Old')
    assert cli.run(['-s', '-c']) == 0
    assert fake_clock.value == fake_clock.default_format


def test_help_exits_zero_without_touching_clock(cli, fake_clock):
    assert cli.run(['-h', '-c']) == 0
    assert fake_clock.writes == []


def test_status_prints_active_focus(cli, fake_clock, capsys):
    fake_clock.set_label('Client Project')
    assert cli.run(['-s']) == 0
    assert 'Client Project' in capsys.readouterr().out


def test_interactive_mode_sets_focus(cli, fake_clock, monkeypatch):
    monkeypatch.setattr(ui, 'prompt_focus_text', lambda: '  Inbox zero ')
    assert cli.run([]) == 0
    assert extract_label(fake_clock.value) == 'Inbox zero'


def test_interactive_mode_blank_clears(cli, fake_clock, monkeypatch):
    fake_clock.set_label('Old')
    monkeypatch.setattr(ui, 'prompt_focus_text', lambda: '')
    assert cli.run([]) == 0
    assert fake_clock.value == fake_clock.default_format


def test_runtime_failure_exits_one(cli, fake_clock):
    def broken_write(value):
        from focusclock.errors import DisplayError
        raise DisplayError('dconf write failed')

    fake_clock.write = broken_write
    assert cli.run(['-c']) == 1


@pytest.mark.parametrize('interrupt', [EOFError, KeyboardInterrupt])
def test_interactive_mode_without_answer_clears(cli, fake_clock, monkeypatch, interrupt):
    fake_clock.set_label('Old')

    def no_answer():
        raise interrupt()

    monkeypatch.setattr(ui, 'prompt_focus_text', no_answer)
    assert cli.run([]) == 0
    assert fake_clock.value == fake_clock.default_format


def test_duration_with_markup_characters_is_printed_literally(cli, capsys):
    assert cli.run(['Task', '[/x]']) == 0
    out = capsys.readouterr().out
    assert 'Timer active for [/x].' in out
