"""store_palette.core: Foundation layer.

Contains the hex codec, WCAG luminance/contrast, colour adjustment, the
palette policy, the contrast audit, storefront records and the report
builder. This module has NO dependencies on store_palette.commands or
store_palette.registry. Only stdlib and numpy are allowed here.
"""
