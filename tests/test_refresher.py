import os

import pytest

from rkn_checker.core.exceptions import DumpReadError
from rkn_checker.core.snapshot import SnapshotStore
from rkn_checker.services.refresher import DumpRefresher

from tests.conftest import RecordingSleep, ScriptedFetcher, fetch_error

FIRST_DUMP = "1.2.3.0/24|5.6.7.8;reason\n"
SECOND_DUMP = "9.9.9.0/24;reason\n"


def make_refresher(dump_dir, outcomes, store=None):
    store = store or SnapshotStore()
    fetcher = ScriptedFetcher(outcomes)
    sleep = RecordingSleep()
    refresher = DumpRefresher(
        store, fetcher, dump_dir=dump_dir, retry_interval=30, interval=1800, sleep=sleep,
    )
    return refresher, fetcher, sleep


class TestInitialLoad:
    def test_first_fetch_succeeds(self, dump_dir) -> None:
        refresher, fetcher, sleep = make_refresher(dump_dir, [FIRST_DUMP])

        refresher.initial_load()

        assert refresher.store.ready
        assert refresher.store.check_many(["1.2.3.4"]) == {"1.2.3.4": True}
        assert fetcher.calls == [os.path.join(os.path.abspath(dump_dir), "dump.current")]
        assert sleep.calls == []

    def test_retries_until_fetch_succeeds(self, dump_dir) -> None:
        outcomes = [fetch_error(), fetch_error(), fetch_error(), FIRST_DUMP]
        refresher, fetcher, sleep = make_refresher(dump_dir, outcomes)

        refresher.initial_load()

        assert len(fetcher.calls) == 4
        assert set(fetcher.calls) == {refresher.current_path}
        assert sleep.calls == [30, 30, 30]
        assert refresher.store.check_many(["1.2.3.4", "5.6.7.8", "9.9.9.9"]) == {
            "1.2.3.4": True,
            "5.6.7.8": True,
            "9.9.9.9": False,
        }

    def test_unreadable_dump_is_fatal(self, dump_dir) -> None:
        refresher, _, sleep = make_refresher(dump_dir, [None])

        with pytest.raises(DumpReadError):
            refresher.initial_load()

        assert not refresher.store.ready
        assert sleep.calls == []


class TestRefreshOnce:
    @pytest.fixture
    def loaded(self, dump_dir):
        def _make(*outcomes):
            refresher, fetcher, sleep = make_refresher(dump_dir, [FIRST_DUMP, *outcomes])
            refresher.initial_load()
            return refresher, fetcher
        return _make

    def test_success_installs_and_promotes_file(self, loaded) -> None:
        refresher, fetcher = loaded(SECOND_DUMP)

        assert refresher.refresh_once() is True

        assert fetcher.calls[-1] == refresher.fresh_path
        assert refresher.store.check_many(["9.9.9.9", "1.2.3.4"]) == {
            "9.9.9.9": True,
            "1.2.3.4": False,
        }
        assert not os.path.exists(refresher.fresh_path)
        with open(refresher.current_path, encoding="cp1251") as f:
            assert f.read() == SECOND_DUMP

    def test_fetch_failure_keeps_previous_snapshot(self, loaded) -> None:
        refresher, _ = loaded(fetch_error())
        before = refresher.store.check_many(["1.2.3.4", "9.9.9.9"])

        assert refresher.refresh_once() is False

        assert refresher.store.check_many(["1.2.3.4", "9.9.9.9"]) == before == {
            "1.2.3.4": True,
            "9.9.9.9": False,
        }
        with open(refresher.current_path, encoding="cp1251") as f:
            assert f.read() == FIRST_DUMP

    def test_read_failure_keeps_previous_snapshot(self, loaded) -> None:
        refresher, _ = loaded(None)

        assert refresher.refresh_once() is False

        assert refresher.store.check_many(["1.2.3.4"]) == {"1.2.3.4": True}

    def test_rename_failure_keeps_new_snapshot(self, loaded, monkeypatch) -> None:
        refresher, _ = loaded(SECOND_DUMP)

        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", fail_replace)

        assert refresher.refresh_once() is True

        assert refresher.store.check_many(["9.9.9.9"]) == {"9.9.9.9": True}
        assert os.path.exists(refresher.fresh_path)

    def test_never_fetches_into_current_file(self, loaded) -> None:
        refresher, fetcher = loaded(fetch_error(), SECOND_DUMP)

        refresher.refresh_once()
        refresher.refresh_once()

        assert fetcher.calls[1:] == [refresher.fresh_path, refresher.fresh_path]


class TestRunForever:
    def test_sleeps_interval_between_cycles(self, dump_dir) -> None:
        class Stop(BaseException):
            pass

        refresher, fetcher, _ = make_refresher(dump_dir, [FIRST_DUMP, fetch_error(), SECOND_DUMP])
        refresher.initial_load()
        sleeps = []

        def sleep(seconds):
            if len(sleeps) == 2:
                raise Stop()
            sleeps.append(seconds)

        refresher._sleep = sleep
        with pytest.raises(Stop):
            refresher.run_forever()

        assert sleeps == [1800, 1800]
        assert len(fetcher.calls) == 3
        assert refresher.store.check_many(["9.9.9.9"]) == {"9.9.9.9": True}

    def test_unexpected_error_does_not_stop_loop(self, dump_dir) -> None:
        class Stop(BaseException):
            pass

        refresher, _, _ = make_refresher(dump_dir, [FIRST_DUMP, RuntimeError("boom"), SECOND_DUMP])
        refresher.initial_load()
        sleeps = []

        def sleep(seconds):
            if len(sleeps) == 2:
                raise Stop()
            sleeps.append(seconds)

        refresher._sleep = sleep
        with pytest.raises(Stop):
            refresher.run_forever()

        assert refresher.store.check_many(["9.9.9.9"]) == {"9.9.9.9": True}
