"""
Plugin entry point.

The host compiler hands every parsed program to ``fluxel_plugin`` together
with per-file metadata, and uses whatever program comes back.
"""
from typing import Optional

from pydantic import BaseModel

from fluxel_plugin.config import ElementizerConfig, parse_config
from fluxel_plugin.elementizer import DefaultExportElementizer
from fluxel_plugin.nodes import Module, Script


class TransformMetadata(BaseModel):
    """Per-file information passed along with a program.

    ``plugin_config`` is the plugin's configuration as JSON text, or None
    for the defaults.
    """
    filename: Optional[str] = None
    plugin_config: Optional[str] = None

    def elementizer_config(self):
        if self.plugin_config is None:
            return ElementizerConfig()
        return parse_config(self.plugin_config, origin="<plugin config>")


def fluxel_plugin(program, metadata=None):
    """Elementize a module; scripts pass through unchanged."""
    metadata = metadata if metadata is not None else TransformMetadata()
    config = metadata.elementizer_config()

    if isinstance(program, Script):
        return program
    if isinstance(program, Module):
        return DefaultExportElementizer(config).transform(program)
    raise TypeError(f"Expected a Module or Script, got {type(program).__name__}")
