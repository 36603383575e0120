"""Tests for rct_pixel_tool.session — superseded results are dropped, failures keep the last result."""

from rct_pixel_tool.errors import InvalidInput
from rct_pixel_tool.session import ResultSlot


class TestResultSlot:
    def test_publish_latest(self):
        slot = ResultSlot()
        token = slot.begin()
        assert slot.publish(token, 'a') is True
        assert slot.result == 'a'

    def test_superseded_result_is_discarded(self):
        slot = ResultSlot()
        old = slot.begin()
        new = slot.begin()
        assert slot.is_current(new)
        assert not slot.is_current(old)
        assert slot.publish(new, 'new') is True
        assert slot.publish(old, 'old') is False
        assert slot.result == 'new'

    def test_failure_keeps_previous_result(self):
        slot = ResultSlot()
        slot.publish(slot.begin(), 'good')
        token = slot.begin()
        error = InvalidInput('cell_size must be positive, got 0')
        assert slot.fail(token, error) is True
        assert slot.result == 'good'
        assert slot.error is error

    def test_publish_clears_error(self):
        slot = ResultSlot()
        slot.fail(slot.begin(), InvalidInput('bad'))
        slot.publish(slot.begin(), 'ok')
        assert slot.error is None

    def test_stale_failure_ignored(self):
        slot = ResultSlot()
        old = slot.begin()
        slot.begin()
        assert slot.fail(old, InvalidInput('late')) is False
        assert slot.error is None

    def test_clear(self):
        slot = ResultSlot()
        token = slot.begin()
        slot.publish(token, 'x')
        slot.clear()
        assert slot.result is None
        assert slot.publish(token, 'y') is False
