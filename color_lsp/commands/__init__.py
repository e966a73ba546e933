"""Command modules.

Every .py file in this package that defines a `command` object is
auto-registered by color_lsp.registry.discover().
"""
