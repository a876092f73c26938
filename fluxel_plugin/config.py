"""
Elementizer configuration.

The configuration is a small JSON document (``fluxel.json``) validated by
a pydantic model. Every field has a default, so a missing file simply means
the stock ``fluxel-`` / ``Element`` / ``customElements`` behavior.
"""
import json
import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from fluxel_plugin.errors import FluxelConfigError

CONFIG_FILE = "fluxel.json"
CONFIG_PATHS = [CONFIG_FILE, os.path.join("~", ".fluxel", CONFIG_FILE)]


class ElementizerConfig(BaseModel):
    """How generated custom elements are named, built and registered."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    tag_prefix: str = "fluxel-"
    class_suffix: str = "Element"
    registry: str = "customElements"
    base_class: Optional[str] = "HTMLElement"
    shadow_mode: Literal["open", "closed"] = "open"
    retain_declaration: bool = False

    @field_validator("tag_prefix")
    @classmethod
    def _check_tag_prefix(cls, value):
        # Custom element names must contain a hyphen and be lowercase
        if "-" not in value or value != value.lower() or not value[0].isalpha():
            raise ValueError("tag_prefix must be lowercase, start with a letter and contain a '-'")
        return value

    @field_validator("class_suffix")
    @classmethod
    def _check_class_suffix(cls, value):
        if not value:
            raise ValueError("class_suffix must not be empty")
        return value


def parse_config(text, origin="<config>"):
    """Validate a JSON configuration document."""
    try:
        return ElementizerConfig.model_validate_json(text)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise FluxelConfigError(
            message=f"Invalid configuration in {origin}: {problems}",
            filename=origin,
            suggestion="Run 'fluxel init' to write a configuration with the default values",
        )


def load_config(path=None):
    """Load the elementizer configuration.

    With an explicit ``path`` the file must exist. Otherwise ``fluxel.json``
    in the working directory, then ``~/.fluxel/fluxel.json`` are tried, and
    the defaults are used when neither exists.
    """
    if path is not None:
        candidates = [path]
        if not os.path.exists(path):
            raise FluxelConfigError(
                message=f"Configuration file not found: {path}",
                filename=path,
                suggestion="Check the --config path",
            )
    else:
        candidates = [os.path.expanduser(p) for p in CONFIG_PATHS]

    for candidate in candidates:
        if os.path.exists(candidate):
            try:
                with open(candidate, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise FluxelConfigError(message=f"Cannot read {candidate}: {e}", filename=candidate)
            return parse_config(text, origin=candidate)

    return ElementizerConfig()


def write_default_config(path=CONFIG_FILE):
    """Write the default configuration as JSON and return it."""
    config = ElementizerConfig()
    with open(path, "w") as f:
        json.dump(config.model_dump(), f, indent=2)
        f.write("\n")
    return config
