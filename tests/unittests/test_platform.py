import logging
import unittest
from unittest.mock import MagicMock, patch

from plexhooks.event_bus import InMemoryEventBus
from plexhooks.exceptions import PayloadError, SensorDoesNotExist
from plexhooks.platform import WebhooksPlatform
from plexhooks.verbose import VerboseLogger

from .conftest import load_fixture


def not_on_apple_tv_config():
    return {
        "verbose": True,
        "sensors": [
            {
                "name": "Not on Apple TV",
                "filters": [
                    [
                        {"path": "Metadata.librarySectionType", "value": "show"},
                        {"path": "Player.title", "value": "Apple TV", "operator": "!=="},
                    ]
                ],
            },
            {
                "name": "Movies anywhere",
                "filters": [
                    [
                        {"path": "Metadata.librarySectionType", "value": "movie"},
                        {"path": "Player.title", "value": "", "operator": "!=="},
                    ]
                ],
            },
        ],
    }


class TestWebhooksPlatform(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.log = MagicMock(spec=VerboseLogger)
        self.platform = WebhooksPlatform(
            not_on_apple_tv_config(), log=self.log, event_bus=InMemoryEventBus()
        )

    async def asyncTearDown(self):
        await self.platform.stop()

    def verbose_lines(self):
        return [call.args[0] for call in self.log.verbose.call_args_list]

    def info_lines(self):
        return [call.args[0] for call in self.log.info.call_args_list]

    async def test_start_logs_sensors(self):
        await self.platform.start()

        self.assertTrue(self.platform.is_running)
        self.assertEqual(
            self.info_lines(),
            ["Found 2 accessories:", "• Not on Apple TV", "• Movies anywhere"],
        )

    async def test_start_logs_single_and_no_sensor(self):
        single = WebhooksPlatform({"sensors": [{"name": "Only"}]}, log=self.log)
        await single.start()
        await single.stop()
        empty = WebhooksPlatform({}, log=self.log)
        await empty.start()
        await empty.stop()

        self.assertEqual(
            self.info_lines(),
            ["Found 1 accessory: Only", "No accessories found in config."],
        )

    async def test_matching_payload_activates_sensor(self):
        matched = await self.platform.process_payload(load_fixture("payload_2.json"))
        self.assertEqual([s.name for s in matched], ["Not on Apple TV"])

        sensor = self.platform.get_sensor("Not on Apple TV")
        self.assertEqual(sensor.state, "media.pause")
        self.assertFalse(sensor.is_active)

        matched = await self.platform.process_payload(load_fixture("payload_3.json"))
        self.assertEqual([s.name for s in matched], ["Not on Apple TV"])
        self.assertTrue(sensor.is_active)
        self.assertFalse(self.platform.get_sensor("Movies anywhere").is_active)

    async def test_signals_are_published_on_sensor_topics(self):
        bus = self.platform.event_bus
        with patch.object(bus, "publish", wraps=bus.publish) as publish:
            await self.platform.process_payload(load_fixture("payload_2.json"))

        sensor = self.platform.get_sensor("Not on Apple TV")
        self.assertEqual([c.kwargs["topic"] for c in publish.call_args_list], [sensor.uuid])
        self.assertEqual(sensor.state, "media.pause")
        self.assertEqual(self.platform.get_sensor("Movies anywhere").state, "media.stop")

    async def test_trace_per_sensor(self):
        await self.platform.process_payload(load_fixture("payload_1.json"))

        self.assertEqual(
            self.verbose_lines(),
            [
                "Checking rules for [Not on Apple TV]",
                " > filter group #1",
                ' - looking for "show" at "Metadata.librarySectionType", found "movie"',
                "Checking rules for [Movies anywhere]",
                " > filter group #1",
                ' + looking for "movie" at "Metadata.librarySectionType", found "movie"',
                ' + looking for "" at "Player.title", found "Apple TV"',
            ],
        )
        self.assertTrue(self.platform.get_sensor("Movies anywhere").is_active)

    async def test_equality_only_sensors_match_everything(self):
        platform = WebhooksPlatform(load_fixture("config.json"), log=self.log)
        matched = await platform.process_payload({"event": "media.play"})
        await platform.stop()

        self.assertEqual(len(matched), 3)
        self.assertTrue(all(sensor.is_active for sensor in platform.sensors.values()))

    async def test_unknown_event_does_not_change_state(self):
        payload = load_fixture("payload_3.json")
        payload["event"] = "library.new"
        matched = await self.platform.process_payload(payload)

        self.assertEqual(len(matched), 1)
        self.assertEqual(self.platform.get_sensor("Not on Apple TV").state, "media.stop")

    async def test_non_mapping_payload(self):
        with self.assertRaises(PayloadError):
            await self.platform.process_payload(["media.play"])

    def test_get_sensor(self):
        sensor = self.platform.get_sensor("Movies anywhere")
        self.assertIs(self.platform.get_sensor(sensor.uuid), sensor)
        with self.assertRaises(SensorDoesNotExist):
            self.platform.get_sensor("Bedroom")

    def test_default_logger_follows_verbose_flag(self):
        platform = WebhooksPlatform({"verbose": True})
        self.assertTrue(platform.log.verbose_enabled)
        self.assertIsInstance(platform.log.logger, logging.Logger)
        self.assertFalse(WebhooksPlatform({}).log.verbose_enabled)


def test_payload_error_serialises():
    error = PayloadError("bad payload", code="invalid_payload", params={"type": "list"})
    assert error.to_dict() == {
        "error_class": "PayloadError",
        "message": "bad payload",
        "code": "invalid_payload",
        "params": {"type": "list"},
    }
    assert isinstance(error, ValueError)
