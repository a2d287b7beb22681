"""Tests for runtime configuration and environment loading."""

import os
import unittest

from tracecontext import runtime_config
from tracecontext.errors import ConfigError


class TestRuntimeConfig(unittest.TestCase):
    def tearDown(self):
        runtime_config.reset()
        for key in list(os.environ.keys()):
            if key.startswith(runtime_config.ENV_PREFIX):
                del os.environ[key]

    def test_defaults(self):
        self.assertEqual(runtime_config.get_max_tracestate_length(), 512)
        self.assertTrue(runtime_config.get_warn_on_invalid_tracestate())

    def test_setters_and_reset(self):
        runtime_config.set_max_tracestate_length(256)
        runtime_config.set_warn_on_invalid_tracestate(False)

        self.assertEqual(runtime_config.get_max_tracestate_length(), 256)
        self.assertFalse(runtime_config.get_warn_on_invalid_tracestate())

        runtime_config.reset()
        self.assertEqual(runtime_config.get_max_tracestate_length(), 512)
        self.assertTrue(runtime_config.get_warn_on_invalid_tracestate())

    def test_max_length_must_be_positive(self):
        with self.assertRaises(ConfigError):
            runtime_config.set_max_tracestate_length(0)
        with self.assertRaises(ConfigError):
            runtime_config.set_max_tracestate_length("512")

    def test_warn_flag_must_be_bool(self):
        for value in ("false", 0, None):
            with self.assertRaises(ConfigError):
                runtime_config.set_warn_on_invalid_tracestate(value)
        self.assertTrue(runtime_config.get_warn_on_invalid_tracestate())

    def test_configure_from_env_uses_settings_bounds(self):
        os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"] = "0"
        with self.assertRaises(ConfigError) as ctx:
            runtime_config.configure_from_env()
        self.assertIn("max_tracestate_length", ctx.exception.details)
        self.assertEqual(runtime_config.get_max_tracestate_length(), 512)

    def test_settings_defaults(self):
        settings = runtime_config.Settings()
        self.assertEqual(settings.max_tracestate_length, 512)
        self.assertTrue(settings.warn_on_invalid_tracestate)

    def test_load_config_from_env(self):
        os.environ.update({
            "TRACECONTEXT_MAX_TRACESTATE_LENGTH": "1024",
            "TRACECONTEXT_WARN_ON_INVALID_TRACESTATE": "no",
        })

        loaded = runtime_config.load_config_from_env()

        self.assertEqual(loaded, {"max_tracestate_length": 1024, "warn_on_invalid_tracestate": False})
        # loading alone does not apply anything
        self.assertEqual(runtime_config.get_max_tracestate_length(), 512)

    def test_load_config_from_env_missing_vars(self):
        self.assertEqual(runtime_config.load_config_from_env(), {})

    def test_boolean_conversion(self):
        for raw, expected in [("true", True), ("1", True), ("ON", True), ("false", False), ("0", False)]:
            os.environ["TRACECONTEXT_WARN_ON_INVALID_TRACESTATE"] = raw
            self.assertEqual(
                runtime_config.load_config_from_env()["warn_on_invalid_tracestate"], expected, raw
            )

    def test_length_can_be_disabled(self):
        os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"] = "none"
        self.assertIsNone(runtime_config.load_config_from_env()["max_tracestate_length"])

    def test_invalid_values_raise(self):
        os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"] = "lots"
        with self.assertRaises(ConfigError):
            runtime_config.load_config_from_env()

        os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"] = "-5"
        with self.assertRaises(ConfigError):
            runtime_config.load_config_from_env()

        del os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"]
        os.environ["TRACECONTEXT_WARN_ON_INVALID_TRACESTATE"] = "maybe"
        with self.assertRaises(ConfigError):
            runtime_config.load_config_from_env()

    def test_configure_from_env_applies(self):
        os.environ["TRACECONTEXT_MAX_TRACESTATE_LENGTH"] = "64"

        applied = runtime_config.configure_from_env()

        self.assertEqual(applied, {"max_tracestate_length": 64})
        self.assertEqual(runtime_config.get_max_tracestate_length(), 64)
        self.assertTrue(runtime_config.get_warn_on_invalid_tracestate())


if __name__ == "__main__":
    unittest.main()
