"""
Tests for PricePoller: tick ordering, stale retention and stop semantics
"""
import asyncio

import pytest

from borsa_dashboard.db import Category
from borsa_dashboard.errors import NotFound
from borsa_dashboard.schemas import LiveQuote, QuoteSnapshot
from borsa_dashboard.services import MarketBoard, PricePoller, PriceService


def snapshot(price: float, symbol: str = "AAA") -> QuoteSnapshot:
    return QuoteSnapshot(
        category=Category.EQUITY,
        quotes={symbol: LiveQuote(symbol=symbol, category=Category.EQUITY, price=price, change_pct=0.0)},
    )


class ControlledFetch:
    """Fetch callable whose results are released by the test, one future per call"""

    def __init__(self) -> None:
        self.calls: list[asyncio.Future] = []

    async def __call__(self) -> QuoteSnapshot:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append(fut)
        return await fut


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


async def test_late_response_from_earlier_tick_is_discarded():
    fetch = ControlledFetch()
    poller = PricePoller(fetch, 60)
    seen = []
    poller.subscribe(seen.append)

    t1 = poller.tick()
    t2 = poller.refresh()
    await settle()
    assert len(fetch.calls) == 2

    fetch.calls[1].set_result(snapshot(105.0))
    await t2
    fetch.calls[0].set_result(snapshot(100.0))
    await t1

    assert poller.snapshot.quotes["AAA"].price == 105.0
    assert poller.applied_tick == 2
    assert len(seen) == 1


async def test_late_success_does_not_clear_newer_failure():
    fetch = ControlledFetch()
    poller = PricePoller(fetch, 60)

    t1 = poller.refresh()
    t2 = poller.refresh()
    await settle()
    fetch.calls[1].set_exception(ConnectionError("upstream down"))
    await t2
    fetch.calls[0].set_result(snapshot(100.0))
    await t1

    assert poller.snapshot.quotes["AAA"].price == 100.0
    assert poller.stale is True
    assert poller.error is not None

    t3 = poller.refresh()
    await settle()
    fetch.calls[2].set_result(snapshot(101.0))
    await t3

    assert poller.stale is False
    assert poller.error is None


async def test_failed_poll_keeps_last_good_snapshot():
    results = [snapshot(100.0), snapshot(105.0), RuntimeError("upstream down")]

    async def fetch():
        item = results.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    poller = PricePoller(fetch, 60)
    await poller.refresh()
    await poller.refresh()
    await poller.refresh()

    assert poller.snapshot.quotes["AAA"].price == 105.0
    assert poller.stale is True
    assert poller.error is not None


async def test_successful_poll_clears_stale_flag():
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise TimeoutError()
        return snapshot(101.0)

    poller = PricePoller(fetch, 60)
    await poller.refresh()
    assert poller.stale and poller.snapshot is None

    await poller.refresh()
    assert not poller.stale and poller.error is None


async def test_tick_skipped_while_fetch_in_flight():
    fetch = ControlledFetch()
    poller = PricePoller(fetch, 60)

    first = poller.tick()
    await settle()
    assert poller.in_flight
    assert poller.tick() is None

    fetch.calls[0].set_result(snapshot(100.0))
    await first
    assert len(fetch.calls) == 1
    assert not poller.in_flight


async def test_result_after_stop_is_discarded():
    fetch = ControlledFetch()
    poller = PricePoller(fetch, 60)

    task = poller.refresh()
    await settle()
    poller.stop()
    fetch.calls[0].set_result(snapshot(100.0))
    await task

    assert poller.snapshot is None
    assert poller.refresh() is None


async def test_timeout_counts_as_failure():
    async def never():
        await asyncio.sleep(10)

    poller = PricePoller(never, 60, timeout_seconds=0.01)
    await poller.refresh()

    assert poller.stale
    assert poller.snapshot is None


async def test_start_is_idempotent_and_aclose_stops():
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        return snapshot(100.0)

    poller = PricePoller(fetch, 60)
    poller.start()
    loop_task = poller._loop_task
    poller.start()
    assert poller._loop_task is loop_task

    await settle()
    await poller.aclose()

    assert calls == 1
    assert not poller.running


class FlakyProvider:
    """Quote provider returning AAA prices from a script; exceptions are raised"""

    category = Category.EQUITY
    api_name = "Scripted"

    def __init__(self, script):
        self.script = list(script)

    async def fetch_quotes(self, symbols):
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return [LiveQuote(symbol="ASELS", category=Category.EQUITY, price=item, change_pct=0.0)]

    async def close(self):
        pass


async def test_board_shows_last_price_and_stale_after_failure(catalog):
    """100, 105, then a failure: the board keeps 105 and marks equities stale"""
    provider = FlakyProvider([100.0, 105.0, OSError("connection reset")])
    service = PriceService({Category.EQUITY: provider}, {})
    board = MarketBoard(catalog, service, {Category.EQUITY: 60})
    poller = board.pollers[Category.EQUITY]

    for _ in range(3):
        await poller.refresh()

    views = board.view(Category.EQUITY, None)
    assert views[0].symbol == "ASELS"
    assert views[0].price == 105.0
    assert views[0].is_live
    assert all(v.stale for v in views)
    assert board.is_stale(Category.EQUITY)
    assert [v.symbol for v in views] == catalog.symbols(Category.EQUITY)


async def test_board_unknown_symbol_raises(catalog):
    board = MarketBoard(catalog, PriceService({}, {}), {})
    with pytest.raises(NotFound):
        board.instrument("NOPE", None)
