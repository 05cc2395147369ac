"""
OptionsStore: read-only loader for fill options and custom field rules.

The file is YAML or JSON, chosen by extension:

    default_max_length: 25
    confirm_fields: ["confirm", "repeat"]
    fields:
      - match: ["e-?mail"]
        type: email
        email_hostname_list: ["corp.example"]
    profiles:
      - name: staging
        url_match: "staging\\.example\\.com"
        fields: [...]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from form_filler.exceptions import OptionsLoadError
from form_filler.options import FillOptions

logger = logging.getLogger(__name__)


class OptionsStore:
    """Loads FillOptions from a single YAML or JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        with open(self.path, "r", encoding="utf-8") as f:
            if self.path.suffix.lower() in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise OptionsLoadError(
                str(self.path), f"Fill options file {self.path} must contain a mapping at top level"
            )
        return data

    def load(self) -> FillOptions:
        """
        Load and validate the options.

        A missing file yields the default options.

        Raises:
            OptionsLoadError: If the file is unreadable, malformed or fails validation
        """
        if not self.path.exists():
            logger.info(f"[OptionsStore.load] No options file at '{self.path}', using defaults.")
            return FillOptions()

        try:
            data = self._read()
            options = FillOptions.model_validate(data)
        except (json.JSONDecodeError, yaml.YAMLError, OSError, ValidationError) as e:
            logger.error(f"[OptionsStore.load] Could not load '{self.path}': {e}")
            raise OptionsLoadError(str(self.path)) from e

        logger.info(
            f"[OptionsStore.load] Loaded options from '{self.path}': "
            f"{len(options.fields)} global rules, {len(options.profiles)} profiles"
        )
        return options
