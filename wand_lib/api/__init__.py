"""API layer for the smart wand.

The module exports WandService, which wraps preset lookup, single-click
tracing and variation generation behind JSON-friendly methods.

Example usage:
    Trace a click::

        from wand_lib.api import WandService

        service = WandService()
        result = service.trace_file('plot.png', x=120, y=64, preset_id='jumpy')
        if result['found']:
            print(result['points'])
"""

from .services import WandService

__all__ = ['WandService']
