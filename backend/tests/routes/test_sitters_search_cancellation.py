"""Cancellation of in-flight searches at the route layer."""

import asyncio
from datetime import date
import threading
from types import SimpleNamespace

from fastapi import HTTPException
import pytest

from app.core.enums import SortPolicy
from app.core.exceptions import SearchCancelledException
from app.routes.v1 import sitters as sitters_routes


class _BlockingSearch:
    """Stands in for SitterSearchService.search; blocks until cancelled."""

    def __init__(self):
        self.started = threading.Event()
        self.finished = threading.Event()
        self.cancel_observed = False

    def search(self, query, cancel_event):
        self.started.set()
        self.cancel_observed = cancel_event.wait(5)
        self.finished.set()
        raise SearchCancelledException("ranking")


def _request(disconnected: bool):
    async def is_disconnected():
        return disconnected

    return SimpleNamespace(is_disconnected=is_disconnected)


def _search(request, service):
    return sitters_routes.search_sitters(
        request,
        lat=40.7128,
        lng=-74.0060,
        start=date(2030, 6, 1),
        end=date(2030, 6, 3),
        page=1,
        page_size=None,
        pet_size=None,
        needs=None,
        sort=SortPolicy.DISTANCE,
        service=service,
    )


@pytest.mark.asyncio
async def test_client_disconnect_cancels_the_search():
    service = _BlockingSearch()

    with pytest.raises(HTTPException) as exc_info:
        await _search(_request(disconnected=True), service)

    assert exc_info.value.status_code == 499
    assert exc_info.value.detail["code"] == "SEARCH_CANCELLED"
    assert service.cancel_observed is True


@pytest.mark.asyncio
async def test_cancelled_handler_waits_for_the_worker_to_stop():
    service = _BlockingSearch()
    task = asyncio.create_task(_search(_request(disconnected=False), service))
    assert await asyncio.to_thread(service.started.wait, 5)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    # The request session is only released after the worker has let go of it
    assert service.finished.is_set()
    assert service.cancel_observed is True
