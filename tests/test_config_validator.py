"""Unit tests for configuration schema validation."""

import unittest

from configs.validator import CONFIG_SCHEMA, validate_config
from exceptions import ConfigValidationError


class TestConfigValidator(unittest.TestCase):
    """Test configuration validator."""

    def test_empty_config_filled_with_defaults(self):
        """Test that every section gets its defaults."""
        config = {}
        validate_config(config)

        self.assertEqual(set(config), set(CONFIG_SCHEMA["properties"]))
        self.assertEqual(config["ingest"]["encoding"], "utf-8-sig")
        self.assertEqual(config["analysis"]["view_by_session"], True)

    def test_defaults_are_not_shared(self):
        """Test that filled defaults are fresh objects per config."""
        first, second = {}, {}
        validate_config(first)
        validate_config(second)

        first["ingest"]["strict"] = True
        self.assertFalse(second["ingest"]["strict"])
        self.assertEqual(CONFIG_SCHEMA["properties"]["ingest"]["default"], {})

    def test_unknown_section_rejected(self):
        """Test that unknown top-level keys are caught."""
        with self.assertRaises(ConfigValidationError):
            validate_config({"camera": {"width": 1920}})

    def test_unknown_field_rejected(self):
        """Test that typos inside a section are caught."""
        with self.assertRaises(ConfigValidationError):
            validate_config({"dates": {"time_zone": "UTC"}})

    def test_wrong_type_reported(self):
        """Test that type errors carry the config path."""
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"ingest": {"header_scan_rows": "fifteen"}})

        self.assertTrue(any(msg.startswith("ingest -> header_scan_rows") for msg in ctx.exception.validation_errors))

    def test_log_level_enum(self):
        """Test that only loguru levels are accepted."""
        validate_config({"logging": {"level": "DEBUG"}})
        with self.assertRaises(ConfigValidationError):
            validate_config({"logging": {"level": "LOUD"}})


if __name__ == "__main__":
    unittest.main()
