"""Visualization tools for mowing areas and planned paths."""

from pathlib import Path
from typing import Union, List, Optional
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MPLPolygon
from matplotlib.collections import PatchCollection

from .geometry import Coordinate, to_shapely_polygon
from .planner import Area, PlanRequest, PlanResponse


class PathVisualizer:
    """Plot yard areas, obstacles, and the mower path (longitude on x, latitude on y)."""

    def __init__(self, figsize=(12, 10)):
        """Initialize the visualizer.

        Args:
            figsize: Figure size in inches (width, height)
        """
        self.figsize = figsize
        self.fig = None
        self.ax = None

    def _ensure_axes(self):
        if self.fig is None:
            self.fig, self.ax = plt.subplots(figsize=self.figsize)
            self.ax.set_aspect("equal")
            self.ax.set_facecolor("#f4f1e8")

    def plot_area(
        self,
        area: Area,
        color: str = "yellowgreen",
        hole_color: str = "saddlebrown",
        alpha: float = 0.5,
        linewidth: float = 0.8,
    ):
        """Plot one area and its obstacles.

        Args:
            area: Area to plot
            color: Fill color for the mowable region
            hole_color: Fill color for obstacles
            alpha: Transparency (0-1)
            linewidth: Edge line width
        """
        self._ensure_axes()
        if len(area.outer) < 3:
            return

        polygon = to_shapely_polygon(area.outer)
        lawn = MPLPolygon([(lon, lat) for lat, lon in polygon.exterior.coords], closed=True)
        self.ax.add_collection(PatchCollection(
            [lawn], facecolor=color, edgecolor="darkolivegreen", linewidth=linewidth, alpha=alpha
        ))

        obstacles = []
        for hole in area.holes:
            if len(hole) < 3:
                continue
            hole_polygon = to_shapely_polygon(hole)
            obstacles.append(MPLPolygon([(lon, lat) for lat, lon in hole_polygon.exterior.coords], closed=True))
        if obstacles:
            self.ax.add_collection(PatchCollection(
                obstacles, facecolor=hole_color, edgecolor="black", linewidth=linewidth, alpha=alpha
            ))

    def plot_path(
        self,
        path: List[Coordinate],
        color: str = "royalblue",
        alpha: float = 0.8,
        linewidth: float = 0.6,
        label: str = "Mowing path",
        show_start: bool = True,
    ):
        """Plot the mowing path.

        Args:
            path: Ordered (lat, lon) coordinates
            color: Line color
            alpha: Transparency
            linewidth: Line width
            label: Label for legend
            show_start: Mark the first coordinate
        """
        self._ensure_axes()
        if len(path) < 2:
            return

        lons = [p[1] for p in path]
        lats = [p[0] for p in path]
        self.ax.plot(lons, lats, color=color, alpha=alpha, linewidth=linewidth, label=label)

        if show_start:
            self.ax.plot([lons[0]], [lats[0]], marker="o", color="crimson", linestyle="none", label="Start")

    def set_bounds(self, min_lat: float, min_lon: float, max_lat: float, max_lon: float, margin: float = 0.0001):
        """Set the plot bounds with margin (in degrees)."""
        if self.ax is None:
            return

        self.ax.set_xlim(min_lon - margin, max_lon + margin)
        self.ax.set_ylim(min_lat - margin, max_lat + margin)

    def add_labels(self, title: str = "Mowing Plan", show_grid: bool = True):
        """Add labels and styling to the plot.

        Args:
            title: Plot title
            show_grid: Whether to show grid
        """
        if self.ax is None:
            return

        self.ax.set_xlabel("Longitude")
        self.ax.set_ylabel("Latitude")
        self.ax.set_title(title, fontsize=14, fontweight="bold")
        self.ax.ticklabel_format(useOffset=False)

        if show_grid:
            self.ax.grid(True, alpha=0.3, color="gray", linestyle="--", linewidth=0.5)

        if self.ax.get_legend_handles_labels()[0]:
            self.ax.legend()

    def save(self, output_path: Union[str, Path], dpi: int = 200):
        """Save the plot to a file.

        Args:
            output_path: Output file path (PNG, PDF, SVG, etc.)
            dpi: Resolution in dots per inch
        """
        if self.fig is None:
            return

        self.fig.tight_layout()
        self.fig.savefig(output_path, dpi=dpi)

    def show(self):
        """Display the plot interactively."""
        if self.fig is None:
            return

        self.fig.tight_layout()
        plt.show()

    def close(self):
        """Close the plot."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None


def visualize_plan(
    request: PlanRequest,
    response: PlanResponse,
    output_path: Optional[Union[str, Path]] = None,
    show: bool = False,
    title: str = "Mowing Plan",
):
    """Quick function to visualize a request and its planned path.

    Args:
        request: Plan request (areas are drawn)
        response: Planned path
        output_path: Optional path to save the image
        show: Whether to display interactively
        title: Plot title
    """
    viz = PathVisualizer()
    for area in request.areas:
        viz.plot_area(area)
    viz.plot_path(response.path)

    points = [p for area in request.areas for p in area.outer] + list(response.path)
    if points:
        lats = [p[0] for p in points]
        lons = [p[1] for p in points]
        viz.set_bounds(min(lats), min(lons), max(lats), max(lons))
    viz.add_labels(title=title)

    if output_path:
        viz.save(output_path)

    if show:
        viz.show()
    else:
        viz.close()
