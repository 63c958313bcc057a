"""
Copyright 2026 liquid-glass authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Analysis utilities: optics diagnostics for refraction tables and an SVG
diagram of the bezel, its traced rays and the object outline.
"""

from .optics_utils import (
    critical_angle,
    incidence_angle,
    tir_indices,
    describe_refraction_table,
)
from .profile_diagram import BezelDiagram

__all__ = [
    'critical_angle',
    'incidence_angle',
    'tir_indices',
    'describe_refraction_table',
    'BezelDiagram',
]
