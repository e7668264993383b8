"""
Tests pour ChangeNotifier.
"""

import pytest

from popcorn.infrastructure.persistence.change_notifier import ChangeNotifier


class TestChangeNotifier:
    @pytest.mark.asyncio
    async def test_notify_sets_every_listener(self):
        notifier = ChangeNotifier()

        with notifier.listen() as first, notifier.listen() as second:
            assert notifier.listener_count == 2
            notifier.notify()
            assert first.is_set()
            assert second.is_set()

    @pytest.mark.asyncio
    async def test_listener_removed_on_exit(self):
        notifier = ChangeNotifier()

        with notifier.listen():
            pass

        assert notifier.listener_count == 0
        notifier.notify()

    @pytest.mark.asyncio
    async def test_listener_removed_on_error(self):
        notifier = ChangeNotifier()

        with pytest.raises(RuntimeError):
            with notifier.listen():
                raise RuntimeError("boom")

        assert notifier.listener_count == 0
