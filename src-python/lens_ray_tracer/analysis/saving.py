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

===============================================================================
Trace Export Utilities
===============================================================================
Writing trace results and scene settings to disk:

- CSV: one row per traced segment, plus one row per final ray
- JSON: scene settings, so a run can be reproduced

The core package never touches the filesystem; everything that does lives
here or in the example scripts.
===============================================================================
"""

import csv
import json
from pathlib import Path
from typing import List, Union

import numpy as np

from ..core.projector import Trace
from ..core.scene import LensScene


def save_traces_csv(
    traces: List[Trace],
    output_path: Union[str, Path],
    filename: str = "rays.csv",
    display_length: float = 0.0,
    precision_coords: int = 4,
) -> Path:
    """
    Export traced segments to a CSV file.

    Every bounded segment becomes one row with kind 'segment'. The final ray
    of each trace becomes one row with kind 'final'; its end point is placed
    `display_length` along the ray (equal to its start when 0).

    Args:
        traces: Traces to export, typically one per entry ray.
        output_path: Directory path where the CSV file will be saved.
        filename: Name of the output CSV file (default: "rays.csv").
        display_length: Length given to the final ray rows.
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename
    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'ray_index',
            'segment_index',
            'kind',
            'start_x',
            'start_y',
            'end_x',
            'end_y',
            'dir_x',
            'dir_y',
            'length',
        ])

        for ray_index, trace in enumerate(traces):
            for segment_index, segment in enumerate(trace.segments):
                end = segment.end
                writer.writerow([
                    ray_index,
                    segment_index,
                    'segment',
                    coord_fmt.format(segment.start.x),
                    coord_fmt.format(segment.start.y),
                    coord_fmt.format(end.x),
                    coord_fmt.format(end.y),
                    coord_fmt.format(segment.direction.x),
                    coord_fmt.format(segment.direction.y),
                    coord_fmt.format(segment.length),
                ])

            if trace.final_ray is not None:
                final = trace.final_ray.to_segment(display_length)
                end = final.end
                writer.writerow([
                    ray_index,
                    len(trace.segments),
                    'final',
                    coord_fmt.format(final.start.x),
                    coord_fmt.format(final.start.y),
                    coord_fmt.format(end.x),
                    coord_fmt.format(end.y),
                    coord_fmt.format(final.direction.x),
                    coord_fmt.format(final.direction.y),
                    coord_fmt.format(final.length),
                ])

    return csv_file


def get_trace_statistics(traces: List[Trace]) -> dict:
    """
    Compute statistics about a collection of traces.

    Args:
        traces: Traces to analyze.

    Returns:
        dict: Dictionary containing:
            - total_rays: Number of traces
            - total_segments: Number of bounded segments over all traces
            - mean_bounces: Average number of segments per trace
            - max_bounces: Largest number of segments in a single trace
            - tir_events: Total number of total internal reflections
            - exhausted_rays: Traces stopped by the bounce limit
            - total_length: Sum of all segment lengths
    """
    if not traces:
        return {
            'total_rays': 0,
            'total_segments': 0,
            'mean_bounces': 0.0,
            'max_bounces': 0,
            'tir_events': 0,
            'exhausted_rays': 0,
            'total_length': 0.0,
        }

    bounces = np.array([trace.bounce_count for trace in traces])
    lengths = [segment.length for trace in traces for segment in trace.segments]

    return {
        'total_rays': len(traces),
        'total_segments': int(bounces.sum()),
        'mean_bounces': float(bounces.mean()),
        'max_bounces': int(bounces.max()),
        'tir_events': sum(trace.tir_count for trace in traces),
        'exhausted_rays': sum(1 for trace in traces if trace.exhausted),
        'total_length': float(np.sum(lengths)) if lengths else 0.0,
    }


def save_scene_json(scene: LensScene, path: Union[str, Path]) -> Path:
    """
    Write the scene settings as JSON.

    Returns:
        Path: The written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(scene.to_dict(), f, indent=2)
    return path


def load_scene_json(path: Union[str, Path]) -> LensScene:
    """
    Read scene settings written by `save_scene_json` (or by hand).

    Raises:
        ValueError: If the file contains unknown or invalid settings.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scene file {path} must contain a JSON object, got {type(data).__name__}")
    return LensScene.from_dict(data)
