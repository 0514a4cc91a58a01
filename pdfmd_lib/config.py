# --- pdfmd_lib/config.py ---
import configparser
import logging

from .constants import DEFAULT_TOOL_TIMEOUT, ENGINES, MODES, OUTPUT_FORMATS

log = logging.getLogger("pdfmd.config")

DEFAULT_CONFIG_PATH = "pdfmd.cfg"


class ConfigService:
    """Reads tool defaults from an INI file such as pdfmd.cfg."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = config_path
        self.defaults = {
            "Extraction": {
                "mode": "semantic",
                "engine": "pdftohtml",
                "timeout": str(DEFAULT_TOOL_TIMEOUT),
            },
            "Output": {
                "format": "markdown",
            },
        }

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        config = configparser.ConfigParser()
        for section, values in self.defaults.items():
            config[section] = values

        if not config.read(self.config_path):
            log.info("Config file not found at %s. Using defaults.", self.config_path)
        else:
            log.debug("Loaded settings from %s", self.config_path)

        return self._config_to_dict(config)

    def resolve(self, mode=None, engine=None, output_format=None, timeout=None) -> dict:
        """Merges explicit options over file settings and validates the result."""
        settings = self.get_settings()
        resolved = {
            "mode": mode or settings["Extraction"]["mode"],
            "engine": engine or settings["Extraction"]["engine"],
            "format": output_format or settings["Output"]["format"],
            "timeout": timeout if timeout is not None else settings["Extraction"]["timeout"],
        }
        if resolved["mode"] not in MODES:
            raise ValueError(f"Unknown mode '{resolved['mode']}'. Choose from {MODES}.")
        if resolved["engine"] not in ENGINES:
            raise ValueError(f"Unknown engine '{resolved['engine']}'. Choose from {ENGINES}.")
        if resolved["format"] not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown format '{resolved['format']}'. Choose from {list(OUTPUT_FORMATS)}."
            )
        try:
            resolved["timeout"] = float(resolved["timeout"])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid timeout: {resolved['timeout']!r}") from e
        return resolved

    def _config_to_dict(self, config: configparser.ConfigParser) -> dict:
        """Converts a ConfigParser object to a nested dictionary."""
        return {s: dict(config.items(s)) for s in config.sections()}
