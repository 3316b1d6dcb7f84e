import copy
import unittest
import uuid

from plexhooks.event_bus import StateChangeEvent
from plexhooks.exceptions import ImproperlyConfigured
from plexhooks.sensors import (
    OccupancySensor,
    SensorConfig,
    expand_config,
    generate_sensor_uuid,
    load_sensors,
    short_serial,
)


class TestSensorIdentity(unittest.TestCase):
    def test_uuid_is_stable(self):
        self.assertEqual(generate_sensor_uuid("Living room"), generate_sensor_uuid("Living room"))
        self.assertNotEqual(generate_sensor_uuid("Living room"), generate_sensor_uuid("Bedroom"))

    def test_uuid_is_valid(self):
        value = generate_sensor_uuid("Living room")
        self.assertEqual(str(uuid.UUID(value)), value)

    def test_short_serial(self):
        self.assertEqual(short_serial("0a1b2c3d-0000-5000-8000-000000000000"), "0A1B2C3D")


class TestExpandConfig(unittest.TestCase):
    def test_missing_sensors(self):
        self.assertEqual(expand_config({"verbose": True}), {"verbose": True, "sensors": []})
        self.assertEqual(expand_config(None), {"sensors": []})
        self.assertEqual(expand_config({"sensors": "nope"})["sensors"], [])

    def test_names_and_identity(self):
        config = {
            "server": {"port": 1234},
            "sensors": [
                {"name": "Movies", "filters": []},
                {"filters": []},
                {"name": "Shows", "id": "shows-1"},
            ],
        }
        expanded = expand_config(config)
        sensors = expanded["sensors"]

        self.assertEqual(expanded["server"], {"port": 1234})
        self.assertEqual([s["name"] for s in sensors], ["Movies", "Sensor 2", "Shows"])
        self.assertEqual([s["id"] for s in sensors], ["Movies", "Sensor 2", "shows-1"])
        self.assertEqual(sensors[2]["uuid"], generate_sensor_uuid("shows-1"))
        self.assertEqual(sensors[0]["serial"], short_serial(sensors[0]["uuid"]))

    def test_input_is_not_mutated(self):
        config = {"sensors": [{"name": "Movies"}]}
        snapshot = copy.deepcopy(config)
        expand_config(config)
        self.assertEqual(config, snapshot)

    def test_non_mapping_sensor_is_skipped(self):
        with self.assertLogs("plexhooks.sensors.config", level="WARNING"):
            expanded = expand_config({"sensors": [None, {"name": "Movies"}]})
        self.assertEqual([s["name"] for s in expanded["sensors"]], ["Movies"])


class TestLoadSensors(unittest.TestCase):
    def test_filters_are_normalised(self):
        sensors = load_sensors(
            {
                "sensors": [
                    {
                        "name": "Not on Apple TV",
                        "filters": [
                            [{"path": "Player.title", "value": "Apple TV", "operator": "!=="}],
                            [{"path": "Player.title", "value": "Roku"}],
                        ],
                    },
                    {"name": "Everything"},
                ]
            }
        )
        self.assertEqual(len(sensors), 2)
        self.assertIsInstance(sensors[0], SensorConfig)
        self.assertEqual(
            sensors[0].filters,
            [[{"path": "Player.title", "value": "Apple TV", "operator": "!=="}], []],
        )
        self.assertEqual(sensors[1].filters, [])
        self.assertEqual(sensors[1].sensor_id, "Everything")

    def test_model_normalises_raw_filters(self):
        sensors = load_sensors(
            {
                "sensors": [
                    {"name": "Null filters", "filters": None},
                    {"name": "Single rule", "filters": {"path": "event", "value": "x"}},
                    {"name": "Equality", "filters": [[{"path": "event", "value": "x"}]]},
                ]
            }
        )
        self.assertEqual([s.filters for s in sensors], [[], [], [[]]])

        direct = SensorConfig(
            name="Direct",
            uuid=generate_sensor_uuid("Direct"),
            filters=[[{"path": "event", "value": "x", "operator": "==="}]],
        )
        self.assertEqual(direct.filters, [[]])

    def test_duplicate_identity(self):
        with self.assertRaises(ImproperlyConfigured):
            load_sensors({"sensors": [{"name": "Movies"}, {"name": "Movies"}]})

    def test_duplicate_names_with_distinct_ids(self):
        sensors = load_sensors(
            {"sensors": [{"name": "Movies", "id": "a"}, {"name": "Movies", "id": "b"}]}
        )
        self.assertNotEqual(sensors[0].uuid, sensors[1].uuid)


class TestOccupancySensor(unittest.TestCase):
    def setUp(self):
        self.config = load_sensors({"sensors": [{"name": "Movies"}]})[0]
        self.sensor = OccupancySensor(self.config)

    def event(self, event_type, sensor_uuid=None):
        return StateChangeEvent(
            event_type=event_type,
            sensor_uuid=sensor_uuid or self.config.uuid,
            sensor_name=self.config.name,
        )

    def test_initially_inactive(self):
        self.assertEqual(self.sensor.state, "media.stop")
        self.assertFalse(self.sensor.is_active)

    def test_play_and_pause(self):
        with self.assertLogs("plexhooks.sensors.sensor", level="INFO") as logs:
            self.assertTrue(self.sensor.set_state(self.event("media.play")))
            self.assertTrue(self.sensor.is_active)
            self.assertTrue(self.sensor.set_state(self.event("media.pause")))
            self.assertFalse(self.sensor.is_active)
            self.assertTrue(self.sensor.set_state(self.event("media.resume")))
            self.assertTrue(self.sensor.is_active)

        self.assertIn("[Movies] is active", logs.output[0])
        self.assertIn("[Movies] is inactive", logs.output[1])

    def test_ignores_other_sensors(self):
        self.assertFalse(self.sensor.set_state(self.event("media.play", "other-uuid")))
        self.assertFalse(self.sensor.is_active)

    def test_ignores_unknown_events(self):
        self.sensor.set_state(self.event("media.play"))
        self.assertFalse(self.sensor.set_state(self.event("media.scrobble")))
        self.assertEqual(self.sensor.state, "media.play")

    def test_identify(self):
        with self.assertLogs("plexhooks.sensors.sensor", level="INFO") as logs:
            self.sensor.identify()
        self.assertIn("Movies occupancy sensor identified!", logs.output[0])
