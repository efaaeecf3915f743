"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- FoliumNetworkRenderer: Folium-based interactive map rendering
"""

from .folium_adapter import FoliumNetworkRenderer

__all__ = ["FoliumNetworkRenderer"]
