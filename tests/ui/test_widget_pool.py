"""
Tests for WidgetPool recycling.
"""
import pytest
from PySide6.QtWidgets import QWidget

from spread.ui.widget_pool import WidgetPool


class ResettableWidget(QWidget):
    def __init__(self):
        super().__init__()
        self.reset_count = 0

    def reset(self):
        self.reset_count += 1


@pytest.fixture
def pool(qapp):
    return WidgetPool(factory=ResettableWidget, soft_limit=4)


class TestWidgetPool:

    def test_acquire_creates_then_reuses_key(self, pool):
        first = pool.acquire(0)
        assert pool.acquire(0) is first
        assert pool.active_count == 1
        assert pool.total_count == 1

    def test_release_recycles(self, pool):
        widget = pool.acquire(0)

        assert pool.release(0) is True
        assert pool.release(0) is False
        assert widget.reset_count == 1
        assert widget.isHidden()
        assert pool.free_count == 1

        assert pool.acquire(7) is widget
        assert pool.total_count == 1

    def test_release_outside(self, pool):
        for key in range(6):
            pool.acquire(key)

        released = pool.release_outside({2, 3})

        assert released == 4
        assert pool.active_keys == {2, 3}
        assert pool.is_active(2)
        assert not pool.is_active(0)
        assert pool.get_widget(5) is None

    def test_grows_past_soft_limit(self, pool):
        widgets = {pool.acquire(key) for key in range(10)}
        assert len(widgets) == 10
        assert pool.active_count == 10

    def test_clear_keeps_widgets_for_reuse(self, pool):
        pool.acquire(0)
        pool.acquire(1)

        pool.clear()

        assert pool.active_count == 0
        assert pool.free_count == 2
