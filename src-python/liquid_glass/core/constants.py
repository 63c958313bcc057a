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
"""

"""
Constants shared by the solver, the rasterizers and the animation driver.

Kept in one module so the rasterizers and the driver can import them
without depending on each other.
"""

# Step of the one-sided finite difference used to estimate the bezel slope
FINITE_DIFFERENCE_STEP = 1e-4

# Number of samples in the 1D refraction lookup table
DEFAULT_SAMPLE_COUNT = 128

# Pixel value meaning "no displacement" (R, G, B, A)
NEUTRAL_DISPLACEMENT = (128, 128, 0, 255)

# Midpoint and half range of an encoded displacement channel
DISPLACEMENT_MIDPOINT = 128
DISPLACEMENT_HALF_RANGE = 127

# Width of the anti-aliased highlight band, in pixels
SPECULAR_THICKNESS = 1.5

# Default direction of the highlight light source, in degrees
DEFAULT_LIGHT_ANGLE = 60.0

# Both |target - value| and |velocity| must fall below this to settle
SPRING_SETTLE_EPSILON = 1e-3

# Longest time step a single animation tick may integrate (seconds)
MAX_FRAME_DT = 1.0 / 60.0

# Shortest interval between pointer samples used for velocity (seconds)
MIN_POINTER_DT = 1e-3

# Residual pointer velocity is multiplied by this every tick after release
VELOCITY_DECAY = 0.95

# Residual velocity (px/s) below which the driver may go idle
VELOCITY_REST_THRESHOLD = 1.0

# Squish: pointer speed (px/s) above which scale_x/scale_y deform,
# the speed that maps to full squish, and the squish ceiling
SQUISH_VELOCITY_THRESHOLD = 50.0
SQUISH_VELOCITY_RANGE = 3000.0
SQUISH_MAX = 0.15

# Spring targets per interaction mode
DRAGGING_TARGETS = {
    'scale': 1.0,
    'shadow_offset_x': 4.0,
    'shadow_offset_y': 16.0,
    'shadow_blur': 24.0,
    'shadow_alpha': 0.22,
    'refraction_boost': 1.0,
}

IDLE_TARGETS = {
    'scale': 0.85,
    'shadow_offset_x': 0.0,
    'shadow_offset_y': 4.0,
    'shadow_blur': 12.0,
    'shadow_alpha': 0.15,
    'refraction_boost': 0.8,
}

# Inset shadow alpha relative to the drop shadow alpha
INSET_SHADOW_RATIO = 0.6
