"""Rendering port - Abstraction for network map generation.

This protocol defines the contract for map rendering, allowing
different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Edge, Metro


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        metros: Sequence[Metro],
        edges: Sequence[Edge],
        output_path: Path,
    ) -> Path:
        """Render the network on a map and save it to a file.

        Args:
            metros: Cities to place on the map.
            edges: Routes to draw between the cities.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
