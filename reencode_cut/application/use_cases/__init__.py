from .render_cuts import RenderCutsUseCase
from .resolve_stream_source import ResolveStreamSourceUseCase

__all__ = [
    "RenderCutsUseCase",
    "ResolveStreamSourceUseCase",
]
