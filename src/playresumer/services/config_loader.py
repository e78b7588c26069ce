"""Defaults file (``.playresumer.yml``) for the resume command."""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from playresumer.errors import ResumerError

# Inline key material belongs in a secret, never in a committed file.
SECRET_KEYS = {"google_account_json"}


class ConfigLoader:
    """Reads CLI defaults and checks each value against its expected type."""

    KEY_TYPES: Dict[str, Tuple[type, ...]] = {
        "package_name": (str,),
        "version_name": (str,),
        "track": (str,),
        "google_account_json_file_path": (str,),
        "request_timeout": (int, float),
        "verbose": (bool,),
        "log_file": (str,),
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        document = self._read(Path(config_path))
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ResumerError("Config file must contain a YAML mapping at the root.")

        secrets = sorted(SECRET_KEYS & set(document))
        if secrets:
            raise ResumerError(
                f"{', '.join(secrets)} is not accepted in config files. "
                "Use google_account_json_file_path or the --google-account-json option."
            )

        unknown = sorted(set(document) - set(self.KEY_TYPES))
        if unknown:
            raise ResumerError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = {}
        for key, value in document.items():
            if value is None:
                continue
            values[key] = self._check_type(key, value)
        return values

    @staticmethod
    def _read(path: Path) -> Any:
        if not path.exists():
            raise ResumerError(f"Config file not found: {path}")
        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ResumerError(f"Invalid config file '{path}': {exc}") from exc

    def _check_type(self, key: str, value: Any) -> Any:
        expected = self.KEY_TYPES[key]
        # YAML booleans are ints to isinstance; only `verbose` may be one.
        if isinstance(value, bool) and bool not in expected:
            valid = False
        else:
            valid = isinstance(value, expected)

        if not valid:
            hint = " Quote version names such as '1.0'." if key == "version_name" else ""
            raise ResumerError(
                f"Invalid {key} in config file: {value!r} "
                f"(expected {' or '.join(kind.__name__ for kind in expected)}).{hint}"
            )
        if key == "request_timeout" and value <= 0:
            raise ResumerError(f"Invalid request_timeout in config file: {value!r} (must be positive).")
        return value
