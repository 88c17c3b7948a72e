import asyncio
import signal
import pytest
from symbcli.cancellation import CancellationToken, run_sync
from symbcli.errors import OperationCancelled


def test_run_sync_returns_result():
    async def answer():
        return 42

    assert run_sync(answer(), CancellationToken()) == 42


def test_run_sync_propagates_errors():
    async def boom():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        run_sync(boom(), CancellationToken())


def test_run_sync_refuses_when_already_cancelled():
    token = CancellationToken()
    token.cancel()
    started = []

    async def work():
        started.append(True)

    with pytest.raises(OperationCancelled):
        run_sync(work(), token)
    assert started == []


def test_cancel_stops_in_flight_call():
    token = CancellationToken()

    async def slow():
        token.cancel()
        await asyncio.sleep(30)
        return "finished"

    with pytest.raises(OperationCancelled):
        run_sync(slow(), token)
    assert token.cancelled
    assert not token.busy


def test_interrupt_handler_restores_previous_handler():
    before = signal.getsignal(signal.SIGINT)
    token = CancellationToken()
    with token.interrupt_handler():
        assert signal.getsignal(signal.SIGINT) == token._on_interrupt
    assert signal.getsignal(signal.SIGINT) == before


def test_interrupt_while_idle_raises_keyboard_interrupt():
    token = CancellationToken()
    with pytest.raises(KeyboardInterrupt):
        token._on_interrupt(signal.SIGINT, None)
    assert token.cancelled
