import json
import os
import stat
import tempfile
import unittest
from pathlib import Path

from hostdeck.core.exceptions import ConfigError
from hostdeck.domain.models import AppConfig, AuthType, Connection, Credential, Icon, Settings
from hostdeck.infrastructure.store import JsonConnectionStore


def sample_config() -> AppConfig:
    return AppConfig(
        settings=Settings(editor="vim", show_hidden_files=True),
        connections=[
            Connection("a", "alpha", "alpha.local", 2222, "root", icon=Icon.LINUX),
            Connection("b", "beta", "beta.local", username="bob",
                       auth_type=AuthType.CREDENTIAL, credential_id="k1"),
        ],
        credentials=[Credential("k1", "Shared", "bob")],
    )


class TestJsonConnectionStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name) / "hostdeck"
        self.store = JsonConnectionStore(self.config_dir)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_loads_empty(self) -> None:
        config = self.store.load()
        self.assertEqual(config.connections, [])
        self.assertEqual(config.settings, Settings())

    def test_save_then_load(self) -> None:
        self.store.save(sample_config())
        self.assertEqual(self.store.load(), sample_config())

    def test_file_is_private_and_has_no_secrets(self) -> None:
        self.store.save(sample_config())
        mode = stat.S_IMODE(os.stat(self.store.path).st_mode)
        self.assertEqual(mode, 0o600)

        data = json.loads(self.store.path.read_text())
        self.assertEqual(data["version"], 1)
        for connection in data["connections"]:
            self.assertNotIn("password", connection)
        self.assertEqual(data["connections"][1]["credential_id"], "k1")

    def test_unknown_icon_falls_back(self) -> None:
        self.config_dir.mkdir(parents=True)
        self.store.path.write_text(json.dumps({
            "connections": [{"id": "x", "label": "x", "host": "h", "icon": "toaster"}],
        }))
        self.assertEqual(self.store.load().connections[0].icon, Icon.SERVER)

    def test_corrupt_file_raises(self) -> None:
        self.config_dir.mkdir(parents=True)
        self.store.path.write_text("{not json")
        with self.assertRaises(ConfigError):
            self.store.load()

    def test_invalid_record_raises(self) -> None:
        self.config_dir.mkdir(parents=True)
        self.store.path.write_text(json.dumps({"connections": [{"label": "no id"}]}))
        with self.assertRaises(ConfigError):
            self.store.load()

    def test_out_of_range_default_port_raises(self) -> None:
        self.config_dir.mkdir(parents=True)
        self.store.path.write_text(json.dumps({"settings": {"default_port": 0}}))
        with self.assertRaises(ConfigError):
            self.store.load()

    def test_unwritable_directory_raises(self) -> None:
        blocker = Path(self._tmp.name) / "file"
        blocker.write_text("")
        store = JsonConnectionStore(blocker / "sub")
        with self.assertRaises(ConfigError):
            store.save(sample_config())


class TestAppConfigMutators(unittest.TestCase):
    def test_mutators_return_copies(self) -> None:
        config = sample_config()
        updated = config.without_connection("a")
        self.assertEqual(len(config.connections), 2)
        self.assertEqual(len(updated.connections), 1)

    def test_with_connection_replaces_by_id(self) -> None:
        config = sample_config()
        renamed = Connection("a", "alpha2", "alpha.local")
        updated = config.with_connection(renamed)
        self.assertEqual([c.label for c in updated.connections], ["alpha2", "beta"])

    def test_connections_using(self) -> None:
        config = sample_config()
        self.assertEqual([c.id for c in config.connections_using("k1")], ["b"])
        self.assertEqual(config.connections_using("k2"), [])

    def test_address(self) -> None:
        self.assertEqual(sample_config().connections[0].address, "root@alpha.local:2222")
        self.assertEqual(Connection("x", "x", "h").address, "h")


if __name__ == "__main__":
    unittest.main()
