"""Folium network map renderer adapter.

Draws every metro as a marker and every route as a line between the
two metros, then saves the interactive map as an HTML file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Sequence, Tuple

from ...domain.errors import RenderingError
from ...domain.models import Edge, Metro, format_number


@dataclass
class FoliumNetworkRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium.

    Attributes:
        zoom_start: Initial zoom level of the map
    """

    zoom_start: int = 2
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        metros: Sequence[Metro],
        edges: Sequence[Edge],
        output_path: Path,
    ) -> Path:
        """Render the network on a map and save it to a file.

        Routes whose endpoints have no metro record are skipped.

        Raises:
            RenderingError: If there is nothing to draw or rendering fails.
        """
        if not metros:
            raise RenderingError(
                "Cannot render a network without cities",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering network map",
            extra={
                "metros": len(metros),
                "edges": len(edges),
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            positions: Dict[str, Tuple[float, float]] = {
                m.code: (
                    m.coordinates.latitude.signed_degrees,
                    m.coordinates.longitude.signed_degrees,
                )
                for m in metros
            }
            center_lat = sum(lat for lat, _ in positions.values()) / len(positions)
            center_lon = sum(lon for _, lon in positions.values()) / len(positions)

            m = folium.Map(location=[center_lat, center_lon], zoom_start=self.zoom_start)

            for metro in metros:
                folium.Marker(
                    location=list(positions[metro.code]),
                    popup=f"{metro.display_name}, {metro.country}",
                    tooltip=metro.code,
                ).add_to(m)

            skipped = 0
            for edge in edges:
                if edge.first not in positions or edge.second not in positions:
                    skipped += 1
                    continue
                folium.PolyLine(
                    [list(positions[edge.first]), list(positions[edge.second])],
                    tooltip=f"{edge.first}-{edge.second}: "
                    f"{format_number(edge.distance)} miles",
                    weight=2,
                    color="blue",
                    opacity=0.6,
                ).add_to(m)

            if skipped:
                self._logger.warning(
                    "Routes without city metadata skipped",
                    extra={"skipped": skipped},
                )

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except (OSError, ValueError) as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
