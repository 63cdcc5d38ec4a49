"""Startup errors."""


class ConfigurationError(Exception):
    """A component was started with a setting it cannot run with."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"{setting} {reason}")
