import asyncio
import unittest
from unittest.mock import AsyncMock

import httpx

from mapmate.core.errors import UpstreamServiceError
from mapmate.core.grid import generate_grid
from mapmate.models.geo_model import Coordinate, SearchQuery
from mapmate.services.Places_service import PlacesService
from mapmate.services.places_client import PlacesClient


def raw_place(place_id, name=None, lat=40.0, lng=-74.0, **extra):
    place = {
        "place_id": place_id,
        "name": name or place_id,
        "types": ["cafe", "food"],
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "vicinity": "1 Main St",
    }
    place.update(extra)
    return place


class RecordingTransport:
    """Serves canned responses in order and keeps every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def make_service(handler):
    client = PlacesClient(api_key="test-key", base_url="https://maps.test", transport=httpx.MockTransport(handler))
    sleep = AsyncMock()
    return PlacesService(client, sleep=sleep, max_pages=3, page_delay=2.0, result_cap=100), sleep


class FetchAllPagesTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.query = SearchQuery(keyword="coffee", center=Coordinate(lat=40.0, lng=-74.0))

    async def test_follows_tokens_until_last_page(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [raw_place("a")], "next_page_token": "t1"}),
            httpx.Response(200, json={"results": [raw_place("b")], "next_page_token": "t2"}),
            httpx.Response(200, json={"results": [raw_place("c")]}),
        ])
        service, sleep = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual([r.place_id for r in results], ["a", "b", "c"])
        self.assertEqual(len(recorder.requests), 3)
        self.assertEqual(sleep.await_count, 2)
        sleep.assert_awaited_with(2.0)

        first = recorder.requests[0].url.params
        self.assertEqual(first["location"], "40.0,-74.0")
        self.assertEqual(first["radius"], "5000")
        self.assertEqual(first["keyword"], "coffee")
        self.assertEqual(first["key"], "test-key")

        # continuation requests carry only the token and the key
        second = recorder.requests[1].url.params
        self.assertEqual(dict(second), {"pagetoken": "t1", "key": "test-key"})
        self.assertEqual(recorder.requests[2].url.params["pagetoken"], "t2")

    async def test_single_page_without_token(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [raw_place("a"), raw_place("b")]}),
        ])
        service, sleep = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual(len(results), 2)
        self.assertEqual(len(recorder.requests), 1)
        sleep.assert_not_awaited()

    async def test_stops_at_page_cap(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [raw_place(f"p{i}")], "next_page_token": f"t{i}"})
            for i in range(5)
        ])
        service, sleep = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual(len(recorder.requests), 3)
        self.assertEqual(len(results), 3)
        self.assertEqual(sleep.await_count, 2)

    async def test_failure_on_second_page_keeps_first_page(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [raw_place("a")], "next_page_token": "t1"}),
            httpx.Response(500, json={"error": "boom"}),
        ])
        service, _ = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual([r.place_id for r in results], ["a"])
        self.assertEqual(len(recorder.requests), 2)

    async def test_malformed_second_page_keeps_first_page(self):
        for bad_body in ([], "oops", {"results": None}):
            recorder = RecordingTransport([
                httpx.Response(200, json={"results": [raw_place("a")], "next_page_token": "t1"}),
                httpx.Response(200, json=bad_body),
            ])
            service, _ = make_service(recorder)

            results = await service.fetch_all_pages(self.query)

            self.assertEqual([r.place_id for r in results], ["a"])

    async def test_error_status_counts_as_failure(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [raw_place("a")], "next_page_token": "t1"}),
            httpx.Response(200, json={"results": [], "status": "INVALID_REQUEST"}),
        ])
        service, _ = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual([r.place_id for r in results], ["a"])

    async def test_reshapes_results(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [
                raw_place("a", name="Joe's", formatted_phone_number="555-0100"),
                raw_place("b"),
                {"name": "no id"},
            ]}),
        ])
        service, _ = make_service(recorder)

        results = await service.fetch_all_pages(self.query)

        self.assertEqual(len(results), 2)
        self.assertEqual(results[0].name, "Joe's")
        self.assertEqual(results[0].categories, ["cafe", "food"])
        self.assertEqual(results[0].address, "1 Main St")
        self.assertEqual(results[0].phone, "555-0100")
        self.assertEqual(results[1].phone, "N/A")
        self.assertEqual(results[0].location, Coordinate(lat=40.0, lng=-74.0))


class GridSearchTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.query = SearchQuery(keyword="pizza", center=Coordinate(lat=40.0, lng=-74.0), radius_km=2.0)
        self.locations = {
            f"{p.lat},{p.lng}": p.index for p in generate_grid(self.query.center, self.query.radius_km)
        }

    def point_index(self, request):
        return self.locations[request.url.params["location"]]

    async def test_deduplicates_keeping_first_grid_occurrence(self):
        requests = []

        def handler(request):
            requests.append(request)
            index = self.point_index(request)
            return httpx.Response(200, json={"results": [
                raw_place("shared", name=f"shared-from-{index}"),
                raw_place(f"own-{index}"),
            ]})

        service, sleep = make_service(handler)
        results = await service.grid_search(self.query)

        ids = [r.place_id for r in results]
        self.assertEqual(len(requests), 9)
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(ids, ["shared"] + [f"own-{i}" for i in range(9)])
        self.assertEqual(results[0].name, "shared-from-0")
        sleep.assert_not_awaited()

        for request in requests:
            self.assertEqual(request.url.params["radius"], "1000")
            self.assertEqual(request.url.params["keyword"], "pizza")
            self.assertNotIn("pagetoken", request.url.params)

    async def test_truncates_to_result_cap_in_grid_order(self):
        def handler(request):
            index = self.point_index(request)
            # next_page_token is ignored by grid search
            return httpx.Response(200, json={
                "results": [raw_place(f"{index}-{n}") for n in range(15)],
                "next_page_token": "ignored"
            })

        service, _ = make_service(handler)
        results = await service.grid_search(self.query)

        self.assertEqual(len(results), 100)
        self.assertEqual(results[0].place_id, "0-0")
        self.assertEqual(results[15].place_id, "1-0")
        self.assertEqual(results[-1].place_id, "6-9")

    async def test_point_failure_fails_whole_search(self):
        def handler(request):
            if self.point_index(request) == 5:
                return httpx.Response(503)
            return httpx.Response(200, json={"results": [raw_place("a")]})

        service, _ = make_service(handler)

        with self.assertRaises(UpstreamServiceError):
            await service.grid_search(self.query)

    async def test_point_failure_cancels_remaining_points(self):
        never = asyncio.Event()
        cancelled = []

        async def handler(request):
            index = self.point_index(request)
            if index == 5:
                return httpx.Response(503)
            try:
                await never.wait()
            except asyncio.CancelledError:
                cancelled.append(index)
                raise
            return httpx.Response(200, json={"results": []})

        service, _ = make_service(handler)

        with self.assertRaises(UpstreamServiceError):
            await service.grid_search(self.query)

        self.assertEqual(sorted(cancelled), [0, 1, 2, 3, 4, 6, 7, 8])

    async def test_malformed_payload_fails_whole_search(self):
        service, _ = make_service(lambda request: httpx.Response(200, json=[1, 2, 3]))

        with self.assertRaises(UpstreamServiceError):
            await service.grid_search(self.query)

    async def test_transport_error_fails_whole_search(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        service, _ = make_service(handler)

        with self.assertRaises(UpstreamServiceError):
            await service.grid_search(self.query)


class FindBusinessesTests(unittest.IsolatedAsyncioTestCase):
    async def test_reshapes_into_businesses(self):
        recorder = RecordingTransport([
            httpx.Response(200, json={"results": [
                raw_place("a", name="Cafe A", lat=40.1, lng=-74.1, formatted_phone_number="555-0101"),
                raw_place("b", name="Cafe B"),
            ]}),
        ])
        service, _ = make_service(recorder)

        businesses = await service.find_businesses("cafe", 40.0, -74.0)

        self.assertEqual(recorder.requests[0].url.params["radius"], "16093")
        self.assertEqual(businesses[0].name, "Cafe A")
        self.assertEqual(businesses[0].description, "cafe, food")
        self.assertEqual((businesses[0].lat, businesses[0].lng), (40.1, -74.1))
        self.assertEqual(businesses[0].address, "1 Main St")
        self.assertEqual(businesses[0].phone, "555-0101")
        self.assertEqual(businesses[1].phone, "N/A")


if __name__ == "__main__":
    unittest.main()
