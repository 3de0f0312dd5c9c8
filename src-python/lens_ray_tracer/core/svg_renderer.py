"""
Copyright 2026 lens-ray-tracer authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math

import svgwrite

from .ray import Ray, Segment
from .surface import Surface


class SVGRenderer:
    """
    SVG drawing sink for traced lens scenes.

    The SVG is organized into three layers (bottom to top):
    - grid: Background crosses
    - rays: Traced segments and final rays
    - objects: Optical surfaces

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches mathematical convention. This is achieved by applying
        a vertical flip transformation to the SVG coordinate system.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        user_viewbox (tuple): Visible region (min_x, min_y, width, height) in Y-up scene units
        pixel_scale (float): Pixels per scene unit along x
        metadata_level (str): 'none' or 'full' (adds data-* attributes)
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=2048, height=2048, viewbox=(-64, -64, 128, 128),
                 metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 2048)
            height (int): Canvas height in pixels (default: 2048)
            viewbox (tuple): Visible region as (min_x, min_y, width, height)
                in Y-up scene units (default: 128 x 128 units around the origin)
            metadata_level (str): 'none' or 'full'
        """
        if metadata_level not in ('none', 'full'):
            raise ValueError(f"metadata_level must be 'none' or 'full', got '{metadata_level}'")

        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = viewbox
        self.pixel_scale = width / viewbox[2]

        # Convert Y-up viewbox to SVG's Y-down viewbox
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_grid = self.dwg.add(self.dwg.g(id='layer-grid', transform='scale(1, -1)'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', transform='scale(1, -1)'))
        self.layer_objects = self.dwg.add(self.dwg.g(id='layer-objects', transform='scale(1, -1)'))

        # Stroke widths and marker sizes in pixels, converted with pixel_scale
        self.surface_width_px = 16 / 6
        self.ray_width_px = 16 / 4
        self.endpoint_radius_px = 5

    def _px(self, pixels):
        """Convert a size in pixels to scene units."""
        return pixels / self.pixel_scale

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value to handle edge cases.

        Handles:
        - Negative zero (-0.0) -> positive zero (0.0)
        - Very small values near zero -> zero
        """
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point):
        return (self._normalize_coord(point[0]), self._normalize_coord(point[1]))

    def _clip_to_viewbox(self, p1, p2):
        """
        Clip a line segment to the viewbox boundaries.

        Uses Liang-Barsky algorithm to clip the line segment p1-p2 to the viewbox.

        Args:
            p1 (tuple): Start point (x, y) in Y-up coordinates
            p2 (tuple): End point (x, y) in Y-up coordinates

        Returns:
            tuple: (clipped_p1, clipped_p2) or (None, None) if completely outside
        """
        min_x, min_y, width, height = self.user_viewbox
        max_x = min_x + width
        max_y = min_y + height

        x1, y1 = p1
        x2, y2 = p2
        dx = x2 - x1
        dy = y2 - y1

        t0, t1 = 0.0, 1.0

        for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
            if abs(p) < 1e-10:
                # Parallel to this edge
                if q < 0:
                    return None, None
            else:
                t = q / p
                if p < 0:
                    t0 = max(t0, t)
                else:
                    t1 = min(t1, t)

        if t0 > t1:
            return None, None

        return (x1 + t0 * dx, y1 + t0 * dy), (x1 + t1 * dx, y1 + t1 * dy)

    def _add_line(self, layer, p1, p2, color, width_px, **extra):
        """Clip, normalize and add a line. Returns the element or None if not visible."""
        if any(math.isnan(v) or math.isinf(v) for v in (*p1, *p2)):
            return None
        p1, p2 = self._clip_to_viewbox(p1, p2)
        if p1 is None:
            return None
        p1 = self._normalize_point(p1)
        p2 = self._normalize_point(p2)
        line = self.dwg.line(
            start=p1,
            end=p2,
            stroke=color,
            stroke_width=self._px(width_px),
            stroke_linecap='round',
            **extra
        )
        layer.add(line)
        return line

    def draw_surface(self, surface: Surface, color='black'):
        """
        Draw an optical surface.

        Args:
            surface (Surface): The surface to draw
            color (str): Stroke color (default: 'black')
        """
        line = self._add_line(self.layer_objects, surface.start.to_tuple(),
                              surface.end.to_tuple(), color, self.surface_width_px)
        if line is not None and self.metadata_level == 'full':
            line['class'] = 'surface'
            line['data-orientation'] = str(surface.orientation)
            line['data-refractive-index'] = f'{surface.refractive_index:g}'

    def draw_segment(self, segment: Segment, color='red'):
        """
        Draw a bounded ray segment with a small circle at each end.

        Args:
            segment (Segment): The segment to draw
            color (str): Stroke color (default: 'red')
        """
        start = segment.start.to_tuple()
        end = segment.end.to_tuple()
        line = self._add_line(self.layer_rays, start, end, color, self.ray_width_px)
        if line is None:
            return
        if self.metadata_level == 'full':
            line['class'] = 'segment'
            line['data-length'] = f'{segment.length:.6f}'

        for point in (start, end):
            self.layer_rays.add(self.dwg.circle(
                center=self._normalize_point(point),
                r=self._px(self.endpoint_radius_px),
                fill='none',
                stroke=color,
                stroke_width=self._px(1),
            ))

    def draw_unbounded_ray(self, ray: Ray, display_length: float, color='red'):
        """
        Draw the final ray of a trace, cut at display_length.

        Args:
            ray (Ray): The ray
            display_length (float): Length to draw in scene units
            color (str): Stroke color (default: 'red')
        """
        end = ray.point_at(display_length)
        line = self._add_line(self.layer_rays, ray.start.to_tuple(), end.to_tuple(),
                              color, self.ray_width_px)
        if line is not None and self.metadata_level == 'full':
            line['class'] = 'final-ray'

    def draw_grid(self, gap=2.0, size_px=8, color='rgb(230, 204, 230)'):
        """
        Draw the background grid of small crosses.

        Args:
            gap (float): Distance between crosses in scene units
            size_px (float): Half-length of each cross arm in pixels
            color (str): Stroke color
        """
        min_x, min_y, width, height = self.user_viewbox
        arm = self._px(size_px)
        nx = int(width // gap)
        ny = int(height // gap)
        for i in range(1, nx + 1):
            x = min_x + i * gap
            for j in range(1, ny + 1):
                y = min_y + j * gap
                self._add_line(self.layer_grid, (x - arm, y), (x + arm, y), color, 1)
                self._add_line(self.layer_grid, (x, y - arm), (x, y + arm), color, 1)

    def save(self, filename: str = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (e.g., 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
