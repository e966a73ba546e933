"""color_lsp.core: foundation layer.

Contains the color types, color space conversions, literal parser,
scanner, hover formatter, report builder and settings loader.
This module has NO dependencies on color_lsp.commands or color_lsp.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
