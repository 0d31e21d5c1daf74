import asyncio

import pytest

from config import GallerySettings
from core.errors import NetworkError, ServiceError
from core.models.domain import GalleryStatus
from core.search.pagination import PaginationController


def make_controller(fetcher, **settings):
    return PaginationController(fetcher, GallerySettings(**settings))


async def settle():
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_first_page_appends_results_and_advances(fetcher, results_factory):
    controller = make_controller(fetcher)
    task = controller.start()
    await settle()

    assert fetcher.calls == [("nature", 1)]
    assert controller.state.is_loading
    fetcher.resolve(results_factory(20))
    await task

    state = controller.state
    assert state.page == 2
    assert len(state.results) == 20
    assert state.has_more
    assert not state.is_loading
    assert state.status is GalleryStatus.IDLE


@pytest.mark.asyncio
async def test_empty_page_exhausts_session(fetcher, results_factory):
    controller = make_controller(fetcher)
    task = controller.start()
    await settle()
    fetcher.resolve(results_factory(20))
    await task

    task = controller.on_scroll_reached_end()
    await settle()
    assert fetcher.calls[-1] == ("nature", 2)
    fetcher.resolve([])
    await task

    state = controller.state
    assert not state.has_more
    assert state.page == 2
    assert state.status is GalleryStatus.EXHAUSTED

    assert controller.on_scroll_reached_end() is None
    await settle()
    assert len(fetcher.calls) == 2
    assert controller.state == state


@pytest.mark.asyncio
async def test_scroll_while_loading_never_issues_second_fetch(fetcher, results_factory):
    controller = make_controller(fetcher)
    task = controller.start()
    await settle()
    before = controller.state

    for _ in range(5):
        assert controller.on_scroll_reached_end() is None
        await settle()

    assert fetcher.calls == [("nature", 1)]
    assert controller.state == before
    fetcher.resolve(results_factory(3))
    await task


@pytest.mark.asyncio
async def test_set_query_resets_session_and_drops_stale_response(fetcher, results_factory):
    controller = make_controller(fetcher)
    first = controller.start()
    await settle()

    second = controller.set_query("cats")
    state = controller.state
    assert state.query == "cats"
    assert state.page == 1
    assert state.results == ()
    assert state.has_more
    assert state.is_loading

    fetcher.resolve(results_factory(20), index=0)
    await first
    assert controller.state.results == ()
    assert controller.state.is_loading

    await settle()
    assert fetcher.calls == [("nature", 1), ("cats", 1)]
    fetcher.resolve(results_factory(5, start=100), index=1)
    await second

    state = controller.state
    assert [result.id for result in state.results] == list(range(100, 105))
    assert state.page == 2
    assert not state.is_loading


@pytest.mark.asyncio
async def test_stale_failure_is_not_reported(fetcher):
    controller = make_controller(fetcher)
    errors = []
    controller.add_error_listener(errors.append)
    first = controller.start()
    await settle()
    controller.set_query("cats")

    fetcher.fail(NetworkError("boom"), index=0)
    await first
    assert errors == []
    assert controller.state.last_error is None
    controller.close()


@pytest.mark.asyncio
async def test_blank_query_maps_to_default(fetcher, results_factory):
    controller = make_controller(fetcher)
    assert controller.set_query("") is None
    assert controller.set_query("   ") is None
    assert controller.state.query == "nature"

    task = controller.set_query("cats")
    await settle()
    fetcher.resolve(results_factory(1))
    await task

    task = controller.set_query("  ")
    assert controller.state.query == "nature"
    await settle()
    assert fetcher.calls[-1] == ("nature", 1)
    fetcher.resolve([])
    await task


@pytest.mark.asyncio
async def test_same_query_keeps_session(fetcher, results_factory):
    controller = make_controller(fetcher)
    task = controller.set_query("cats")
    await settle()
    fetcher.resolve(results_factory(20))
    await task

    assert controller.set_query(" cats ") is None
    assert controller.state.page == 2
    assert len(controller.state.results) == 20


@pytest.mark.asyncio
async def test_debounced_typing_issues_single_fetch(fetcher, results_factory):
    controller = make_controller(fetcher, debounce_delay=0.05)

    for text in ("c", "ca", "cat"):
        controller.on_query_changed(text)
        await asyncio.sleep(0.01)
    assert fetcher.calls == []

    await asyncio.sleep(0.1)
    assert fetcher.calls == [("cat", 1)]
    fetcher.resolve(results_factory(2))
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_timeout_failure_keeps_session_retryable(fetcher, results_factory):
    controller = make_controller(fetcher)
    errors = []
    controller.add_error_listener(errors.append)
    task = controller.start()
    await settle()
    fetcher.resolve(results_factory(20))
    await task

    task = controller.on_scroll_reached_end()
    await settle()
    fetcher.fail(NetworkError("Request timed out after 10 seconds."))
    await task

    state = controller.state
    assert not state.is_loading
    assert isinstance(state.last_error, NetworkError)
    assert state.page == 2
    assert state.has_more
    assert len(state.results) == 20
    assert state.status is GalleryStatus.ERROR
    assert len(errors) == 1

    task = controller.on_scroll_reached_end()
    assert controller.state.last_error is None
    await settle()
    assert fetcher.calls[-1] == ("nature", 2)
    fetcher.resolve(results_factory(20, start=20))
    await task
    assert controller.state.page == 3
    assert len(controller.state.results) == 40


@pytest.mark.asyncio
async def test_dismiss_error_clears_notification(fetcher):
    controller = make_controller(fetcher)
    task = controller.start()
    await settle()
    fetcher.fail(ServiceError("HTTP 500", status_code=500))
    await task

    assert isinstance(controller.state.last_error, ServiceError)
    controller.dismiss_error()
    assert controller.state.last_error is None
    assert controller.state.status is GalleryStatus.IDLE


@pytest.mark.asyncio
async def test_unexpected_errors_propagate_after_resetting_loading(fetcher):
    controller = make_controller(fetcher)
    task = controller.start()
    await settle()
    fetcher.fail(RuntimeError("bug"))

    with pytest.raises(RuntimeError):
        await task
    assert not controller.state.is_loading
    assert controller.state.last_error is None


@pytest.mark.asyncio
async def test_listeners_receive_snapshots(fetcher, results_factory):
    controller = make_controller(fetcher)
    states = []
    controller.add_listener(states.append)
    task = controller.start()
    await settle()
    fetcher.resolve(results_factory(4))
    await task

    assert [state.is_loading for state in states] == [True, False]
    assert len(states[-1].results) == 4

    controller.remove_listener(states.append)
    controller.dismiss_error()
    controller.set_query("cats")
    assert len(states) == 2
    await settle()
    fetcher.resolve([])
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_close_cancels_fetch_and_pending_debounce(fetcher, results_factory):
    controller = make_controller(fetcher, debounce_delay=0.02)
    states = []
    controller.add_listener(states.append)
    task = controller.start()
    await settle()
    controller.on_query_changed("cat")

    controller.close()
    await asyncio.sleep(0.05)

    assert task.cancelled()
    assert fetcher.calls == [("nature", 1)]
    assert len(states) == 1
    assert controller.on_scroll_reached_end() is None
    assert controller.set_query("dogs") is None
    controller.close()


@pytest.mark.asyncio
async def test_unawaited_fetch_failure_is_logged(fetcher, caplog):
    controller = make_controller(fetcher)
    loop_errors = []
    asyncio.get_running_loop().set_exception_handler(lambda loop, context: loop_errors.append(context))

    task = controller.start()
    await settle()
    fetcher.fail(RuntimeError("bug"))
    with caplog.at_level("ERROR", logger="core.search.pagination"):
        await asyncio.wait([task])
        await settle()

    assert any("Fetch task failed unexpectedly" in record.getMessage() for record in caplog.records)
    del task
    await settle()
    assert loop_errors == []
