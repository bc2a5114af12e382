#!/usr/bin/env python3
"""Configuration tests: dataclass validation, YAML loading, environment."""

import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bfengine import EngineConfig, config_from_env, load_config

FIXTURES = Path(__file__).parent / "fixtures"


class TestEngineConfig(unittest.TestCase):

    def test_defaults(self):
        config = EngineConfig()
        self.assertIsNone(config.max_steps)
        self.assertEqual(config.delay_ms, 0)
        self.assertEqual(config.tape_capacity, 65536)
        self.assertIsNone(config.max_tape_length)
        self.assertEqual(config.bracket_strategy, "index")
        self.assertEqual(config.comment_marker, "//")
        self.assertFalse(config.preview)

    def test_validation(self):
        for kwargs in ({"max_steps": -1}, {"delay_ms": -5}, {"tape_capacity": 0},
                       {"max_tape_length": 0}, {"bracket_strategy": "guess"}):
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    EngineConfig(**kwargs)

    def test_merged_skips_none(self):
        config = EngineConfig(max_steps=10).merged(max_steps=None, delay_ms=5)
        self.assertEqual(config.max_steps, 10)
        self.assertEqual(config.delay_ms, 5)


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text: str) -> str:
        path = os.path.join(self.tmpdir.name, "config.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_nested_fixture(self):
        config = load_config(str(FIXTURES / "config.yaml"))
        self.assertEqual(config.max_steps, 500)
        self.assertEqual(config.bracket_strategy, "scan")

    def test_flat_mapping(self):
        config = load_config(self.write("max_steps: 42\npreview: true\ncomment_marker: '#'\n"))
        self.assertEqual(config.max_steps, 42)
        self.assertTrue(config.preview)
        self.assertEqual(config.comment_marker, "#")

    def test_empty_file_gives_base(self):
        base = EngineConfig(delay_ms=3)
        self.assertEqual(load_config(self.write(""), base), base)

    def test_unknown_key(self):
        with self.assertRaises(ValueError) as ctx:
            load_config(self.write("max_stepz: 1\n"))
        self.assertIn("max_stepz", str(ctx.exception))

    def test_wrong_type(self):
        with self.assertRaises(ValueError):
            load_config(self.write("max_steps: lots\n"))
        with self.assertRaises(ValueError):
            load_config(self.write("delay_ms: true\n"))

    def test_not_a_mapping(self):
        with self.assertRaises(ValueError):
            load_config(self.write("- 1\n- 2\n"))

    def test_invalid_yaml(self):
        with self.assertRaises(ValueError):
            load_config(self.write("max_steps: [1, 2\n"))

    def test_missing_file(self):
        with self.assertRaises(OSError):
            load_config(os.path.join(self.tmpdir.name, "missing.yaml"))


class TestConfigFromEnv(unittest.TestCase):

    def test_reads_variables(self):
        env = {"BF_STEP_LIMIT": "100", "BF_DELAY_MS": "7", "BF_MAX_TAPE_LENGTH": "1024"}
        config = config_from_env(environ=env)
        self.assertEqual(config.max_steps, 100)
        self.assertEqual(config.delay_ms, 7)
        self.assertEqual(config.max_tape_length, 1024)

    def test_empty_values_ignored(self):
        base = EngineConfig(max_steps=3)
        self.assertEqual(config_from_env(base, {"BF_STEP_LIMIT": " "}), base)

    def test_bad_integer(self):
        with self.assertRaises(ValueError) as ctx:
            config_from_env(environ={"BF_TAPE_CAPACITY": "big"})
        self.assertIn("BF_TAPE_CAPACITY", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
