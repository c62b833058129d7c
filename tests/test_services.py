import unittest
from unittest import mock

from travel_map_api.app.core.config import settings
from travel_map_api.app.core.exceptions import InvalidPayloadError, NotFoundError, StorageWriteError
from travel_map_api.app.core.store import load_collection
from travel_map_api.app.services.attraction_service import AttractionService
from travel_map_api.app.services.audit_service import AuditService
from travel_map_api.app.services import hydrophone_service
from travel_map_api.app.services.hydrophone_service import HydrophoneService
from travel_map_api.app.services.poi_service import PoiService
from travel_map_api.app.services.route_service import RouteService
from travel_map_api.app.services.statistics_service import StatisticsService

from tests.helpers import TempDataDirMixin


class PoiServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_create_assigns_id_and_defaults(self):
        poi = await PoiService.create_item({"name": "Pier", "lng": 120.1, "lat": 30.2})
        self.assertEqual(
            poi,
            {"id": poi["id"], "name": "Pier", "lng": 120.1, "lat": 30.2, "address": "", "tags": []},
        )
        self.assertEqual(load_collection("pois"), [poi])

    async def test_create_ids_are_unique(self):
        first = await PoiService.create_item({"name": "A", "lng": 1, "lat": 2})
        second = await PoiService.create_item({"name": "A", "lng": 1, "lat": 2})
        self.assertNotEqual(first["id"], second["id"])

    async def test_create_rejects_invalid_payloads(self):
        bad_payloads = [
            None,
            [],
            {"lng": 1, "lat": 2},
            {"name": "", "lng": 1, "lat": 2},
            {"name": 5, "lng": 1, "lat": 2},
            {"name": "Pier", "lng": "120.1", "lat": 30.2},
            {"name": "Pier", "lng": True, "lat": 30.2},
            {"name": "Pier", "lng": 120.1},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(InvalidPayloadError) as ctx:
                    await PoiService.create_item(payload)
                self.assertEqual(ctx.exception.message, "Invalid payload")
        self.assertEqual(load_collection("pois"), [])

    async def test_create_rejects_non_finite_numbers(self):
        for value in [float("nan"), float("inf"), float("-inf")]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidPayloadError):
                    await PoiService.create_item({"name": "Pier", "lng": value, "lat": 1})
        with self.assertRaises(InvalidPayloadError):
            await AttractionService.create_item({"name": "Tower", "tags": [float("nan")]})
        self.assertEqual(load_collection("pois"), [])
        self.assertEqual(load_collection("attractions"), [])

    async def test_list_orders_by_name(self):
        for name in ["Harbor", "Beach", "Cliff"]:
            await PoiService.create_item({"name": name, "lng": 0, "lat": 0})
        names = [p["name"] for p in await PoiService.list_items()]
        self.assertEqual(names, ["Beach", "Cliff", "Harbor"])
        stored = [p["name"] for p in load_collection("pois")]
        self.assertEqual(stored, ["Harbor", "Beach", "Cliff"])

    async def test_update_patches_only_sent_fields(self):
        poi = await PoiService.create_item({"name": "Pier", "lng": 120.1, "lat": 30.2, "address": "Dock 1"})
        updated = await PoiService.update_item(poi["id"], {"tags": ["park"]})
        self.assertEqual(updated["name"], "Pier")
        self.assertEqual(updated["address"], "Dock 1")
        self.assertEqual(updated["tags"], ["park"])
        self.assertEqual(load_collection("pois"), [updated])

    async def test_update_cannot_change_id(self):
        poi = await PoiService.create_item({"name": "Pier", "lng": 1, "lat": 2})
        updated = await PoiService.update_item(poi["id"], {"id": "other", "name": "Jetty"})
        self.assertEqual(updated["id"], poi["id"])
        self.assertEqual(updated["name"], "Jetty")

    async def test_update_unknown_id_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            await PoiService.update_item("missing", {"name": "x"})

    async def test_update_rejects_wrong_types(self):
        poi = await PoiService.create_item({"name": "Pier", "lng": 1, "lat": 2})
        with self.assertRaises(InvalidPayloadError):
            await PoiService.update_item(poi["id"], {"lat": "north"})
        self.assertEqual(load_collection("pois"), [poi])

    async def test_delete_removes_exactly_one(self):
        keep = await PoiService.create_item({"name": "Keep", "lng": 1, "lat": 2})
        drop = await PoiService.create_item({"name": "Drop", "lng": 1, "lat": 2})
        await PoiService.delete_item(drop["id"])
        self.assertEqual(await PoiService.list_items(), [keep])
        with self.assertRaises(NotFoundError):
            await PoiService.delete_item(drop["id"])

    async def test_mutations_are_audited(self):
        poi = await PoiService.create_item({"name": "Pier", "lng": 1, "lat": 2})
        await PoiService.update_item(poi["id"], {"name": "Jetty"})
        await PoiService.delete_item(poi["id"])
        logs = await AuditService.list_logs()
        self.assertEqual([e["type"] for e in logs], ["poi_delete", "poi_update", "poi_create"])
        self.assertEqual(logs[2]["detail"], {"id": poi["id"], "name": "Pier"})
        self.assertEqual(logs[0]["detail"], {"id": poi["id"]})


class RouteServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_create_requires_coords(self):
        for payload in [{"name": "Loop"}, {"name": "Loop", "coords": []}, {"name": "Loop", "coords": "x"}]:
            with self.subTest(payload=payload):
                with self.assertRaises(InvalidPayloadError):
                    await RouteService.create_item(payload)

    async def test_create_stamps_created_at(self):
        route = await RouteService.create_item({"name": "Loop", "coords": [[1, 2], [3, 4]]})
        self.assertEqual(set(route), {"id", "name", "coords", "createdAt"})
        self.assertEqual(route["coords"], [[1, 2], [3, 4]])

    async def test_list_newest_first(self):
        stamps = iter(["2024-01-01T00:00:00.000Z", "2024-03-01T00:00:00.000Z", "2024-02-01T00:00:00.000Z"])
        with mock.patch(
            "travel_map_api.app.services.collection_service.utc_now_iso", side_effect=lambda: next(stamps)
        ):
            for name in ["jan", "mar", "feb"]:
                await RouteService.create_item({"name": name, "coords": [[0, 0]]})
        names = [r["name"] for r in await RouteService.list_items()]
        self.assertEqual(names, ["mar", "feb", "jan"])

    async def test_update_keeps_created_at(self):
        route = await RouteService.create_item({"name": "Loop", "coords": [[0, 0]]})
        updated = await RouteService.update_item(route["id"], {"coords": [[1, 1], [2, 2]]})
        self.assertEqual(updated["createdAt"], route["createdAt"])
        self.assertEqual(updated["name"], "Loop")


class AttractionServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_only_name_is_required(self):
        item = await AttractionService.create_item({"name": "Old Lighthouse"})
        self.assertEqual(item["address"], "")
        self.assertEqual(item["tags"], [])
        self.assertEqual(item["desc"], "")
        self.assertIsNone(item["lng"])
        with self.assertRaises(InvalidPayloadError):
            await AttractionService.create_item({"desc": "no name"})

    async def test_update_desc(self):
        item = await AttractionService.create_item({"name": "Tower", "lng": 1.5, "lat": 2.5})
        updated = await AttractionService.update_item(item["id"], {"desc": "Tall"})
        self.assertEqual(updated["desc"], "Tall")
        self.assertEqual(updated["lng"], 1.5)


class HydrophoneServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_latest_is_empty_before_update(self):
        self.assertEqual(await HydrophoneService.latest(), {})

    async def test_update_requires_coordinates(self):
        with self.assertRaises(InvalidPayloadError):
            await HydrophoneService.update({"longitude": 1})
        with self.assertRaises(InvalidPayloadError):
            await HydrophoneService.update({"longitude": "1", "latitude": 2})

    async def test_update_normalises_optional_fields(self):
        snapshot = await HydrophoneService.update(
            {
                "longitude": 122.0,
                "latitude": 29.9,
                "heading": "north",
                "temperature": 18.5,
                "shipDetected": 1,
                "shipType": None,
            }
        )
        self.assertIsNone(snapshot["heading"])
        self.assertEqual(snapshot["temperature"], 18.5)
        self.assertIsNone(snapshot["salinity"])
        self.assertIs(snapshot["shipDetected"], True)
        self.assertEqual(snapshot["shipType"], "")
        self.assertTrue(snapshot["timestamp"])
        self.assertEqual(await HydrophoneService.latest(), snapshot)
        logs = await AuditService.list_logs()
        self.assertEqual(logs[0]["type"], "hydrophone_update")
        self.assertEqual(logs[0]["detail"], {"ts": snapshot["timestamp"]})

    async def test_update_keeps_given_timestamp(self):
        snapshot = await HydrophoneService.update(
            {"longitude": 1, "latitude": 2, "timestamp": "2024-05-01T08:00:00Z"}
        )
        self.assertEqual(snapshot["timestamp"], "2024-05-01T08:00:00Z")

    async def test_create_history_defaults(self):
        record = await HydrophoneService.create_history({"longitude": 1, "latitude": 2})
        self.assertEqual(record["name"], "Unnamed")
        self.assertIsNone(record["sentAt"])
        self.assertFalse(record["shipDetected"])
        self.assertTrue(record["createdAt"])
        self.assertEqual(await HydrophoneService.latest(), {})

    async def test_send_applies_record_and_stamps_sent_at(self):
        record = await HydrophoneService.create_history(
            {
                "name": "Buoy 7",
                "longitude": 121.5,
                "latitude": 31.2,
                "salinity": 33.1,
                "shipDetected": True,
                "shipType": "cargo",
                "timestamp": "2024-01-01T00:00:00.000Z",
            }
        )
        result = await HydrophoneService.send_history(record["id"])
        applied = result["applied"]
        self.assertTrue(result["ok"])
        self.assertEqual(applied["longitude"], 121.5)
        self.assertEqual(applied["latitude"], 31.2)
        self.assertEqual(applied["shipType"], "cargo")
        self.assertNotEqual(applied["timestamp"], "2024-01-01T00:00:00.000Z")
        self.assertEqual(await HydrophoneService.latest(), applied)
        stored = load_collection("hydro_history")[0]
        self.assertEqual(stored["sentAt"], applied["timestamp"])
        self.assertEqual(stored["timestamp"], "2024-01-01T00:00:00.000Z")
        logs = await AuditService.list_logs()
        self.assertEqual(logs[0]["type"], "hydro_history_send")
        self.assertEqual(logs[0]["detail"], {"id": record["id"], "ts": applied["timestamp"]})

    async def test_send_unknown_record(self):
        with self.assertRaises(NotFoundError):
            await HydrophoneService.send_history("missing")
        self.assertEqual(await HydrophoneService.latest(), {})

    async def test_send_can_be_retried_after_history_write_failure(self):
        record = await HydrophoneService.create_history({"longitude": 1, "latitude": 2})
        real_save = hydrophone_service.save_collection

        def failing_history_save(name, documents):
            if name == "hydro_history":
                raise StorageWriteError(name, "disk full")
            real_save(name, documents)

        with mock.patch.object(hydrophone_service, "save_collection", side_effect=failing_history_save):
            with self.assertRaises(StorageWriteError):
                await HydrophoneService.send_history(record["id"])
        # Snapshot applied, history not yet marked.
        self.assertEqual((await HydrophoneService.latest())["longitude"], 1)
        self.assertIsNone(load_collection("hydro_history")[0]["sentAt"])

        result = await HydrophoneService.send_history(record["id"])
        self.assertEqual(load_collection("hydro_history")[0]["sentAt"], result["applied"]["timestamp"])

    async def test_delete_history(self):
        record = await HydrophoneService.create_history({"longitude": 1, "latitude": 2})
        await HydrophoneService.delete_history(record["id"])
        self.assertEqual(await HydrophoneService.list_history(), [])
        with self.assertRaises(NotFoundError):
            await HydrophoneService.delete_history(record["id"])


class AuditServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_entries_are_newest_first(self):
        await AuditService.log("first", {"n": 1})
        await AuditService.log("second")
        logs = await AuditService.list_logs()
        self.assertEqual([e["type"] for e in logs], ["second", "first"])
        self.assertEqual(logs[1]["detail"], {"n": 1})
        self.assertEqual(logs[0]["detail"], {})
        self.assertEqual(set(logs[0]), {"id", "type", "detail", "ts"})

    async def test_log_is_capped_at_limit(self):
        for n in range(501):
            await AuditService.log("op", {"n": n})
        logs = await AuditService.list_logs()
        self.assertEqual(len(logs), 500)
        self.assertEqual(logs[0]["detail"], {"n": 500})
        self.assertEqual(logs[-1]["detail"], {"n": 1})

    async def test_limit_follows_settings(self):
        settings.audit_log_limit = 3
        for n in range(5):
            await AuditService.log("op", {"n": n})
        logs = await AuditService.list_logs()
        self.assertEqual([e["detail"]["n"] for e in logs], [4, 3, 2])


class StatisticsServiceTests(TempDataDirMixin, unittest.IsolatedAsyncioTestCase):
    async def test_increment_counts_calls(self):
        for _ in range(7):
            await StatisticsService.increment("GET", "/api/pois")
        await StatisticsService.increment("GET", "/api/pois/")
        snapshot = await StatisticsService.snapshot()
        self.assertEqual(snapshot["GET /api/pois"], 7)
        self.assertEqual(snapshot["GET /api/pois/"], 1)

    async def test_increment_returns_new_count(self):
        self.assertEqual(await StatisticsService.increment("POST", "/api/routes"), 1)
        self.assertEqual(await StatisticsService.increment("POST", "/api/routes"), 2)


if __name__ == "__main__":
    unittest.main()
