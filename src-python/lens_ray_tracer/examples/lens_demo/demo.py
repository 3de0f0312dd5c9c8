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

"""
Lens Demo - Vertical Ray Fan Through a Conic Lens

Setup:
- Conic lens (c=-0.04, k=8.2, K=1.9) sampled every 0.05 units, stretched 4x
  horizontally and centred at (0, -40), refractive index 4.4
- Thirteen vertical rays at x = -30, -25, ..., 30 starting from y = -100
- Up to 32 bounces per ray

Expected behavior:
- Rays near the axis pass through the lens with little deviation
- Rays further out are bent strongly; some are trapped by total internal
  reflection and bounce inside the lens until the bounce limit

Usage:
    python demo.py [scene.json] [--verbose N]
"""

import logging
import os
import sys

# Add parent directories to path to import lens_ray_tracer when run directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from lens_ray_tracer.core.scene import LensScene, render_scene
from lens_ray_tracer.core.svg_renderer import SVGRenderer
from lens_ray_tracer.analysis import (
    get_trace_statistics,
    load_scene_json,
    save_traces_csv,
)


def main(argv=None, verbose: int = 1, output_dir: str = None):
    """
    Run the lens demonstration.

    Args:
        argv: Command line arguments (default: sys.argv[1:]). An optional
            path to a scene JSON file and an optional '--verbose N'.
        verbose (int): Verbosity level (default: 1)
            0 = silent (warnings only)
            1 = verbose (scene summary)
            2 = very verbose/debug (every bounce)
        output_dir (str): Where to write output.svg and rays.csv
            (default: next to this script)
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if '--verbose' in argv:
        i = argv.index('--verbose')
        verbose = int(argv[i + 1])
        del argv[i:i + 2]

    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    scene = load_scene_json(argv[0]) if argv else LensScene()

    print("Lens Demo - Vertical Ray Fan Through a Conic Lens")
    print("=" * 60)

    surfaces = scene.build_surfaces()
    print(f"\nScene setup:")
    print(f"  Lens: c={scene.c}, k={scene.k}, K={scene.K}, n={scene.refractive_index}")
    print(f"  Placement: scale=({scene.scale_x}, {scene.scale_y}), "
          f"translate=({scene.translate_x}, {scene.translate_y})")
    print(f"  Surfaces: {len(surfaces)}")

    print("\nTracing...")
    traces = scene.trace(surfaces)

    stats = get_trace_statistics(traces)
    print(f"  Rays: {stats['total_rays']}")
    print(f"  Segments: {stats['total_segments']} (max {stats['max_bounces']} per ray)")
    print(f"  TIR events: {stats['tir_events']}")
    print(f"  Rays stopped by bounce limit: {stats['exhausted_rays']}")

    renderer = SVGRenderer()
    renderer.draw_grid()
    render_scene(renderer, surfaces, traces, scene.display_length)

    if output_dir is None:
        output_dir = os.path.dirname(os.path.abspath(__file__))

    svg_file = os.path.join(output_dir, 'output.svg')
    renderer.save(svg_file)
    print(f"\nSVG saved to: {svg_file}")

    csv_file = save_traces_csv(traces, output_dir, display_length=scene.display_length)
    print(f"CSV data exported to: {csv_file}")

    return traces


if __name__ == "__main__":
    main()
