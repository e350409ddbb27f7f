from autosig_core.constants import CLEAR_STORAGE_FLAG, NEW_SIGNATURE_KEY, REPLY_SIGNATURE_KEY
from autosig_core.invalidation import CacheInvalidationController
from conftest import run


def _seed(kvs):
    run(kvs.set(NEW_SIGNATURE_KEY, {"content": "new"}, expires_ms=60_000, soft_expire=True))
    run(kvs.set(REPLY_SIGNATURE_KEY, {"content": "reply"}, expires_ms=60_000, soft_expire=True))
    run(kvs.set("unrelated", "stays"))


def test_no_flag_leaves_cache_alone(kvs, roaming, provider):
    _seed(kvs)
    controller = CacheInvalidationController(kvs, roaming)

    assert run(controller.check_and_clear()) is False
    assert run(kvs.get(NEW_SIGNATURE_KEY)) == {"content": "new"}
    assert len(provider.items) == 5


def test_flag_purges_both_signatures_and_clears_flag(kvs, roaming, host, provider):
    _seed(kvs)
    host.roaming[CLEAR_STORAGE_FLAG] = "true"
    controller = CacheInvalidationController(kvs, roaming)

    assert run(controller.check_and_clear()) is True
    assert set(provider.items) == {"unrelated"}
    assert CLEAR_STORAGE_FLAG not in host.roaming
    assert host.saves == 1

    # exactly once per detection
    assert run(controller.check_and_clear()) is False


def test_failed_flag_save_still_reports_purge(kvs, roaming, host):
    _seed(kvs)
    host.roaming[CLEAR_STORAGE_FLAG] = True
    host.fail.add("save_roaming_settings")

    assert run(CacheInvalidationController(kvs, roaming).check_and_clear()) is True
    assert run(kvs.get(REPLY_SIGNATURE_KEY)) is None
