"""navtile.core: Foundation layer.

Contains the palette, dither patterns, classification tables, encoder,
diagnostic sinks, settings and report builder.
This module has NO dependencies on navtile.strategies or navtile.registry
at import time. Only stdlib, numpy, PIL and rich are allowed here.
"""
