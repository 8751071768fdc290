"""Restore consent: a boolean setting resolved from layered sources.

The answer combines an environment variable, a persisted settings value
and a shipped default. Either the settings or the environment variable
can grant consent; neither can revoke what the other grants.
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from .config import ConsentConfig

# Integer text equal to one, allowing a leading or trailing plus sign,
# group separators and zero decimals
_INTEGER_ONE = re.compile(r"^(?:\+?(?:0[0,]*)?1(?:\.0*)?|(?:0[0,]*)?1(?:\.0*)?\+)$")


class SettingsStore(Protocol):
    """Persisted configuration values addressed by section and key."""

    def get_value(self, section: str, key: str) -> Optional[str]:
        ...

    def set_value(self, section: str, key: str, value: str) -> None:
        ...


class InMemorySettings:
    """SettingsStore backed by a dict of sections."""

    def __init__(self, values: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._values = {section: dict(keys) for section, keys in (values or {}).items()}

    def get_value(self, section: str, key: str) -> Optional[str]:
        return self._values.get(section, {}).get(key)

    def set_value(self, section: str, key: str, value: str) -> None:
        self._values.setdefault(section, {})[key] = value


class EnvironmentReader:
    """Read environment variables, from os.environ unless given a mapping."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    def get_environment_variable(self, name: str) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name)


@dataclass(frozen=True)
class ConfigurationDefaults:
    """Machine-wide defaults consulted when settings leave a value blank."""

    default_package_restore_consent: Optional[str] = None


def _safe_trim(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def is_set(value: Optional[str]) -> bool:
    """Check whether a setting value means "on".

    True for a boolean "true" in any case, or an integer equal to 1.
    """
    if value is None:
        return False
    value = value.strip()
    if value.lower() == "true":
        return True
    return bool(_INTEGER_ONE.match(value))


class RestoreConsent:
    """Resolve whether package restore is allowed, and whether it is automatic."""

    def __init__(self,
                 settings: SettingsStore,
                 environment: Optional[EnvironmentReader] = None,
                 defaults: Optional[ConfigurationDefaults] = None,
                 config: Optional[ConsentConfig] = None):
        """Initialize consent resolver.

        Args:
            settings: Persisted settings to read and write
            environment: Environment variable source (defaults to os.environ)
            defaults: Shipped defaults for blank settings
            config: Names of the environment variable, section and keys

        Raises:
            ValueError: If settings is None
        """
        if settings is None:
            raise ValueError("settings is required")

        self.settings = settings
        self.environment = environment or EnvironmentReader()
        self.defaults = defaults or ConfigurationDefaults()
        self.config = config or ConsentConfig()

    @property
    def is_granted(self) -> bool:
        """Consent from settings, or from the environment variable."""
        env_value = _safe_trim(
            self.environment.get_environment_variable(self.config.environment_variable))
        return self.is_granted_in_settings or is_set(env_value)

    @property
    def is_granted_in_settings(self) -> bool:
        """Consent from settings, then defaults; granted when both are blank."""
        value = self.settings.get_value(self.config.section, self.config.consent_key)
        if not value or not value.strip():
            value = self.defaults.default_package_restore_consent
        value = _safe_trim(value)

        if not value:
            return True
        return is_set(value)

    @is_granted_in_settings.setter
    def is_granted_in_settings(self, granted: bool) -> None:
        self.settings.set_value(self.config.section, self.config.consent_key, str(bool(granted)))

    @property
    def is_automatic(self) -> bool:
        """Automatic restore setting; follows consent when left blank."""
        value = self.settings.get_value(self.config.section, self.config.automatic_key)
        if not value or not value.strip():
            return self.is_granted_in_settings
        return is_set(value)

    @is_automatic.setter
    def is_automatic(self, automatic: bool) -> None:
        self.settings.set_value(self.config.section, self.config.automatic_key, str(bool(automatic)))
