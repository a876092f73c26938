# Fluxel - Default-Export Elementizer
"""
Modules of the Fluxel elementizer:
- errors: Compile/config errors and syntax-error hints
- parser: Reads JS/TSX with tree-sitter and builds the syntax tree
- nodes: Immutable syntax-tree node models
- elementizer: The default-export -> custom-element transform
- codegen: Prints syntax trees back as JavaScript
- config: Elementizer configuration (fluxel.json)
- plugin: Entry point called by the host compiler for every program
"""

from .errors import FluxelCompileError, FluxelConfigError, FluxelSyntaxError
from .parser import parse_module
from .elementizer import DefaultExportElementizer, element_class_name, element_tag_name
from .codegen import emit_program
from .config import ElementizerConfig, load_config
from .plugin import TransformMetadata, fluxel_plugin

__all__ = [
    'FluxelCompileError',
    'FluxelConfigError',
    'FluxelSyntaxError',
    'parse_module',
    'DefaultExportElementizer',
    'element_class_name',
    'element_tag_name',
    'emit_program',
    'ElementizerConfig',
    'load_config',
    'TransformMetadata',
    'fluxel_plugin',
]
