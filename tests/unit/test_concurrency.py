import time

from flight_stats.utils.concurrency import run_batch


def test_run_batch_keeps_input_order():
    delays = {"a": 0.05, "b": 0.0, "c": 0.02}

    def work(item):
        time.sleep(delays[item])
        return item.upper()

    outcomes = run_batch(work, ["a", "b", "c"], max_workers=3, show_progress=False)

    assert [outcome.item for outcome in outcomes] == ["a", "b", "c"]
    assert [outcome.value for outcome in outcomes] == ["A", "B", "C"]


def test_run_batch_waits_for_all_despite_failures():
    def work(item):
        if item == 2:
            raise ValueError("bad item")
        return item * 10

    outcomes = run_batch(work, [1, 2, 3], max_workers=2, show_progress=False)

    assert [outcome.ok for outcome in outcomes] == [True, False, True]
    assert isinstance(outcomes[1].error, ValueError)
    assert outcomes[2].value == 30


def test_run_batch_with_no_items():
    assert run_batch(lambda item: item, [], show_progress=False) == []
