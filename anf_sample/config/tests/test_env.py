# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

from unittest import TestCase
from unittest.mock import patch

from anf_sample.config.env import (
    CLEANUP_SETTING,
    VOLUME_SIZE_SETTING,
    MissingConfigOptionError,
    get_config_option,
    is_truthy,
    parse_config_option,
)


class TestGetConfigOption(TestCase):
    def test_missing_config_option(self):
        with self.assertRaises(MissingConfigOptionError) as ctx:
            get_config_option("missing_option")

        self.assertEqual(str(ctx.exception), "Missing required configuration option: missing_option")

    @patch.dict("anf_sample.config.env.environ", {"AZURE_AUTH_LOCATION": "/tmp/auth.json", "ANF_LOCATION": "eastus"})
    def test_get_config_option(self):
        self.assertEqual(get_config_option("AZURE_AUTH_LOCATION"), "/tmp/auth.json")
        self.assertEqual(get_config_option("ANF_LOCATION"), "eastus")


class TestParseConfigOption(TestCase):
    @patch.dict("anf_sample.config.env.environ", {VOLUME_SIZE_SETTING: "214748364800"})
    def test_parse_config_option_valid(self):
        result = parse_config_option(VOLUME_SIZE_SETTING, int, 100)
        self.assertEqual(result, 214748364800)

    @patch.dict("anf_sample.config.env.environ", {VOLUME_SIZE_SETTING: "invalid"})
    def test_parse_config_option_invalid(self):
        result = parse_config_option(VOLUME_SIZE_SETTING, int, 100)
        self.assertEqual(result, 100)

    @patch.dict("anf_sample.config.env.environ", {}, clear=True)
    def test_parse_config_option_missing(self):
        result = parse_config_option(VOLUME_SIZE_SETTING, int, 100)
        self.assertEqual(result, 100)

    @patch.dict("anf_sample.config.env.environ", {VOLUME_SIZE_SETTING: "hi"})
    def test_parse_config_option_parser_returns_none(self):
        result = parse_config_option(VOLUME_SIZE_SETTING, lambda _: None, 100)
        self.assertEqual(result, 100)


class TestIsTruthy(TestCase):
    def test_truthy_values(self):
        for value in ("true", "True", " 1 ", "yes", "y", "t"):
            with patch.dict("anf_sample.config.env.environ", {CLEANUP_SETTING: value}):
                self.assertTrue(is_truthy(CLEANUP_SETTING), value)

    def test_falsy_values(self):
        for value in ("false", "0", "", "no"):
            with patch.dict("anf_sample.config.env.environ", {CLEANUP_SETTING: value}):
                self.assertFalse(is_truthy(CLEANUP_SETTING), value)

    @patch.dict("anf_sample.config.env.environ", {}, clear=True)
    def test_unset(self):
        self.assertFalse(is_truthy(CLEANUP_SETTING))
