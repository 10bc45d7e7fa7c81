import pytest

from focusclock.clock import extract_label
from focusclock.desktop import is_process_running
from focusclock.errors import InvalidInput
from focusclock.models import TimerRecord
from focusclock.session import SessionManager


def test_set_without_duration_reports_untimed_label(manager, timer_store):
    manager.set_focus('Deep Work Session')

    status = manager.status()
    assert status.state == 'untimed'
    assert status.label == 'Deep Work Session'
    assert not timer_store.exists()


def test_set_trims_label(manager, fake_clock):
    result = manager.set_focus('   Reading  ')
    assert result.label == 'Reading'
    assert extract_label(fake_clock.value) == 'Reading'


@pytest.mark.parametrize('label', ['', '   ', '\t\n'])
def test_set_rejects_empty_label(manager, fake_clock, label):
    with pytest.raises(InvalidInput):
        manager.set_focus(label)
    assert fake_clock.writes == []


def test_set_with_duration_writes_record_and_reports_remaining(manager, timer_store, launcher):
    result = manager.set_focus('Coding Sprint', '45m')

    record = timer_store.read()
    assert record.pid == result.timer_pid
    assert record.label == 'Coding Sprint'
    assert launcher.calls == [('45m', 'Coding Sprint')]

    status = manager.status()
    assert status.state == 'timed'
    assert status.label == 'Coding Sprint'
    assert 45 * 60 - 60 < status.remaining_seconds <= 45 * 60


def test_unusual_duration_is_flagged_but_still_started(manager, timer_store):
    result = manager.set_focus('Thing', 'a while')
    assert result.duration_warning
    assert timer_store.exists()


def test_new_set_kills_previous_timer(manager, timer_store, launcher):
    first = manager.set_focus('First', '25m')
    manager.set_focus('Second')

    launcher.processes[0].wait(timeout=5)
    assert not is_process_running(first.timer_pid)
    assert not timer_store.exists()

    status = manager.status()
    assert status.state == 'untimed'
    assert status.label == 'Second'


def test_clear_restores_default_and_removes_record(manager, fake_clock, timer_store):
    manager.set_focus('Something', '10m')
    manager.clear_focus()

    assert fake_clock.value == "'%b %d  %H:%M'"
    assert not timer_store.exists()
    assert manager.status().state == 'none'


def test_clear_twice_is_not_an_error(manager, fake_clock):
    manager.clear_focus()
    first = fake_clock.value
    manager.clear_focus()
    assert fake_clock.value == first == fake_clock.default_format


def test_status_with_no_session(manager):
    status = manager.status()
    assert status.state == 'none'
    assert not status.stale


def test_status_reports_custom_format(manager, fake_clock):
    fake_clock.value = "'%A %H:%M'"
    status = manager.status()
    assert status.state == 'custom'
    assert status.raw_format == "'%A %H:%M'"


def test_stale_record_is_removed_and_untimed_label_found(manager, fake_clock, timer_store):
    fake_clock.set_label('Leftover')
    timer_store.write(TimerRecord(pid=999999999, expiry=0, label='Leftover'))

    status = manager.status()
    assert status.stale
    assert status.state == 'untimed'
    assert status.label == 'Leftover'
    assert not timer_store.exists()


def test_stale_record_with_default_clock_reports_none(manager, timer_store):
    timer_store.write(TimerRecord(pid=999999999, expiry=0, label='Gone'))

    status = manager.status()
    assert status.stale
    assert status.state == 'none'


def test_status_reports_ended_when_expiry_passed(fake_clock, timer_store, launcher):
    clock_time = [1_000_000.0]
    manager = SessionManager(
        clock=fake_clock, store=timer_store, launcher=launcher, now=lambda: clock_time[0]
    )
    manager.set_focus('Short', '30s')

    clock_time[0] += 31
    status = manager.status()
    assert status.state == 'ended'
    assert status.label == 'Short'
