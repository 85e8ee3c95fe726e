import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from instsys_ingest.config import DEFAULTS, Config


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / "config.json"
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"database_name": "campus_db", "log_level": "DEBUG"}, f)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _without_env(self):
        for key in ("INSTSYS_MONGO_URI", "INSTSYS_DATABASE"):
            os.environ.pop(key, None)

    def test_file_values_over_defaults(self):
        with mock.patch.dict(os.environ):
            self._without_env()
            config = Config(self.path)
        self.assertEqual(config.database_name, "campus_db")
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.mongo_uri, DEFAULTS["mongo_uri"])

    def test_environment_wins(self):
        env = {"INSTSYS_MONGO_URI": "mongodb://db:27017/", "INSTSYS_DATABASE": "env_db"}
        with mock.patch.dict(os.environ, env):
            config = Config(self.path)
        self.assertEqual(config.mongo_uri, "mongodb://db:27017/")
        self.assertEqual(config.database_name, "env_db")

    def test_missing_file_uses_defaults(self):
        with mock.patch.dict(os.environ):
            self._without_env()
            config = Config(Path(self.tmpdir) / "missing.json")
        self.assertEqual(config.as_dict(), DEFAULTS)


if __name__ == "__main__":
    unittest.main()
