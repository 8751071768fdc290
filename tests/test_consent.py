"""Tests for restore consent resolution from layered sources."""

import os
import unittest
from unittest.mock import patch

from expandstate import (
    ConfigurationDefaults,
    ConsentConfig,
    EnvironmentReader,
    InMemorySettings,
    RestoreConsent,
)
from expandstate.consent import is_set


def consent(settings=None, env=None, default=None, **kwargs):
    return RestoreConsent(
        InMemorySettings({"packageRestore": settings or {}}),
        environment=EnvironmentReader(env or {}),
        defaults=ConfigurationDefaults(default_package_restore_consent=default),
        **kwargs,
    )


class TestIsSet(unittest.TestCase):
    """Boolean true or integer one count as set."""

    def test_true_values(self):
        for value in ["true", "True", "TRUE", " true ", "1", "+1", "01", "1.0", "1.", " 1 ", "0,001", "1+", "01.0+"]:
            with self.subTest(value=value):
                self.assertTrue(is_set(value))

    def test_false_values(self):
        for value in [None, "", "false", "0", "2", "-1", "1.5", "yes", "on", "10", "1,0", "+1+", "1-"]:
            with self.subTest(value=value):
                self.assertFalse(is_set(value))


class TestIsGrantedInSettings(unittest.TestCase):
    """Settings first, then shipped defaults, then granted."""

    def test_blank_everywhere_is_granted(self):
        self.assertTrue(consent().is_granted_in_settings)

    def test_settings_value(self):
        self.assertFalse(consent({"enabled": "false"}).is_granted_in_settings)
        self.assertTrue(consent({"enabled": "True"}).is_granted_in_settings)

    def test_settings_win_over_defaults(self):
        self.assertTrue(consent({"enabled": "1"}, default="false").is_granted_in_settings)

    def test_blank_settings_use_defaults(self):
        self.assertFalse(consent({"enabled": "   "}, default="false").is_granted_in_settings)
        self.assertFalse(consent(default=" 0 ").is_granted_in_settings)

    def test_blank_defaults_granted(self):
        self.assertTrue(consent(default="   ").is_granted_in_settings)

    def test_unrecognized_value_not_granted(self):
        self.assertFalse(consent({"enabled": "maybe"}).is_granted_in_settings)

    def test_setter_writes_setting(self):
        settings = InMemorySettings()
        resolver = RestoreConsent(settings, environment=EnvironmentReader({}))

        resolver.is_granted_in_settings = False

        self.assertEqual(settings.get_value("packageRestore", "enabled"), "False")
        self.assertFalse(resolver.is_granted_in_settings)


class TestIsGranted(unittest.TestCase):
    """The environment variable can grant what settings refuse."""

    def test_env_grants(self):
        self.assertTrue(consent({"enabled": "false"}, env={"EnableNuGetPackageRestore": " 1 "}).is_granted)
        self.assertTrue(consent({"enabled": "false"}, env={"EnableNuGetPackageRestore": "true"}).is_granted)

    def test_env_cannot_revoke(self):
        self.assertTrue(consent({"enabled": "true"}, env={"EnableNuGetPackageRestore": "false"}).is_granted)

    def test_neither_grants(self):
        self.assertFalse(consent({"enabled": "false"}, env={"EnableNuGetPackageRestore": "0"}).is_granted)
        self.assertFalse(consent({"enabled": "false"}).is_granted)

    def test_reads_process_environment_by_default(self):
        resolver = RestoreConsent(InMemorySettings({"packageRestore": {"enabled": "false"}}))

        with patch.dict(os.environ, {"EnableNuGetPackageRestore": "1"}):
            self.assertTrue(resolver.is_granted)
        with patch.dict(os.environ, {"EnableNuGetPackageRestore": "0"}):
            self.assertFalse(resolver.is_granted)


class TestIsAutomatic(unittest.TestCase):
    """Automatic restore follows consent unless set explicitly."""

    def test_blank_follows_consent(self):
        self.assertTrue(consent().is_automatic)
        self.assertFalse(consent({"enabled": "false"}).is_automatic)

    def test_explicit_value(self):
        self.assertFalse(consent({"enabled": "true", "automatic": "false"}).is_automatic)
        self.assertTrue(consent({"enabled": "false", "automatic": " 1 "}).is_automatic)

    def test_setter_writes_setting(self):
        settings = InMemorySettings()
        resolver = RestoreConsent(settings, environment=EnvironmentReader({}))

        resolver.is_automatic = True

        self.assertEqual(settings.get_value("packageRestore", "automatic"), "True")


class TestConfiguration(unittest.TestCase):

    def test_settings_required(self):
        with self.assertRaises(ValueError):
            RestoreConsent(None)

    def test_custom_names(self):
        config = ConsentConfig(environment_variable="ALLOW_RESTORE", section="restore",
                               consent_key="allowed", automatic_key="auto")
        resolver = RestoreConsent(
            InMemorySettings({"restore": {"allowed": "false", "auto": "true"}}),
            environment=EnvironmentReader({"ALLOW_RESTORE": "1"}),
            config=config,
        )

        self.assertFalse(resolver.is_granted_in_settings)
        self.assertTrue(resolver.is_granted)
        self.assertTrue(resolver.is_automatic)


if __name__ == "__main__":
    unittest.main()
