import json
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from hacker_stories import config
from hacker_stories.storage import LocalStorage


class TestLocalStorage(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="hacker_stories_storage_")
        self.path = os.path.join(self.test_dir, "nested", "storage.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_missing_file_reads_as_empty(self):
        storage = LocalStorage(self.path)
        self.assertIsNone(storage.get("search"))

    def test_set_then_get(self):
        storage = LocalStorage(self.path)
        storage.set("search", "Cypress")

        self.assertEqual(LocalStorage(self.path).get("search"), "Cypress")
        with open(self.path, "r") as f:
            self.assertEqual(json.load(f), {"search": "Cypress"})

    def test_set_keeps_other_keys(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            json.dump({"theme": "nord"}, f)

        LocalStorage(self.path).set("search", "React")
        with open(self.path, "r") as f:
            self.assertEqual(json.load(f), {"theme": "nord", "search": "React"})

    def test_corrupted_file_reads_as_empty(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            f.write("{not json")

        storage = LocalStorage(self.path)
        self.assertIsNone(storage.get("search"))
        storage.set("search", "React")
        self.assertEqual(storage.get("search"), "React")


class TestConfigLoading(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="hacker_stories_config_")
        self.path = os.path.join(self.test_dir, ".config", "config.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_default_config_is_created(self):
        loaded = config.load_config(self.path)

        self.assertTrue(os.path.exists(self.path))
        self.assertEqual(loaded, config.DEFAULT_CONFIG)

    def test_user_values_override_defaults(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            json.dump({"default_term": "Python", "recent_searches": 3}, f)

        loaded = config.load_config(self.path)
        self.assertEqual(loaded["default_term"], "Python")
        self.assertEqual(loaded["recent_searches"], 3)
        self.assertEqual(loaded["api_base_url"], config.API_BASE_URL)

    def test_corrupted_config_falls_back_to_defaults(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            f.write("[1, 2")

        self.assertEqual(config.load_config(self.path), config.DEFAULT_CONFIG)

    @patch("hacker_stories.config.logging.basicConfig")
    def test_setup_logging_without_debug(self, mock_basic_config):
        self.assertIsNone(config.setup_logging(False))
        mock_basic_config.assert_called_once()

    @patch("hacker_stories.config.logging.basicConfig")
    def test_setup_logging_with_debug(self, mock_basic_config):
        urllib3_logger = logging.getLogger("urllib3")
        previous_level = urllib3_logger.level
        try:
            debug_path = config.setup_logging(True)
            self.assertTrue(debug_path.startswith("/tmp/hacker_stories_debug_"))
            self.assertEqual(mock_basic_config.call_args.kwargs["filename"], debug_path)
            self.assertEqual(urllib3_logger.level, logging.INFO)
        finally:
            urllib3_logger.setLevel(previous_level)


if __name__ == "__main__":
    unittest.main()
