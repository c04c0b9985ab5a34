# --- roomgraph_lib/config.py ---
import configparser
import logging

log = logging.getLogger("roomgraph.config")


class ConfigService:
    """Manages reading from and writing to the roomgraph.cfg file."""

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.defaults = {
            "Assets": {
                "root": "assets",
                "points_layer": "points.PNG",
                "joints_layer": "joints.PNG",
                "background_layer": "bg.PNG",
            },
            "Output": {
                "indent": "4",
            },
        }

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        config = configparser.ConfigParser()
        for section, values in self.defaults.items():
            config[section] = values

        if not config.read(self.config_path):
            log.info("Config file not found at %s. Creating with defaults.", self.config_path)
            self.save_settings(self._config_to_dict(config))

        settings = self._config_to_dict(config)
        log.debug("Effective settings: %s", settings)
        return settings

    def save_settings(self, settings: dict):
        """Saves a dictionary of settings to the config file."""
        config = configparser.ConfigParser()
        for section, values in settings.items():
            config[section] = {k: str(v) for k, v in values.items()}

        try:
            with open(self.config_path, "w") as configfile:
                config.write(configfile)
            log.info("Settings successfully saved to %s", self.config_path)
        except IOError as e:
            log.error("Failed to write settings to %s: %s", self.config_path, e)

    def _config_to_dict(self, config: configparser.ConfigParser) -> dict:
        """Converts a ConfigParser object to a nested dictionary."""
        return {s: dict(config.items(s)) for s in config.sections()}


def default_settings() -> dict:
    """Returns the built-in defaults without touching the filesystem."""
    return {s: dict(v) for s, v in ConfigService("").defaults.items()}
