"""Spine vector user configuration.

This is the user-facing configuration file. Modify settings and landmark
points here; expert defaults live in spinevec.schemas.param.

Usage:
    python scripts/run_spine_vector.py scripts/user_config.py
    python scripts/run_spine_vector.py scripts/user_config.py --weight-kg 75
    spinevec scripts/user_config.py -v
"""

CONFIG = {
    # ========================================================================
    # SUBJECT
    # ========================================================================
    "WEIGHT_KG": 60.0,        # Body weight in kg

    # ========================================================================
    # LANDMARKS (image pixel coordinates, y grows downward)
    # ========================================================================
    # Each entry is {"x", "y", "label"} or (x, y, label). At least two
    # labelled points per region (cervical, thoracic, lumbar) are required.
    "POINTS": [
        {"x": 100, "y": 50, "label": "C5"},
        {"x": 95, "y": 80, "label": "C6"},
        {"x": 90, "y": 150, "label": "T6"},
        {"x": 92, "y": 180, "label": "T7"},
        {"x": 88, "y": 260, "label": "L2"},
        {"x": 85, "y": 290, "label": "L3"},
    ],

    # ========================================================================
    # ADVANCED
    # ========================================================================
    "MIN_POINTS_PER_REGION": 2,
    "RESAMPLE_POINTS": 1000,      # Samples of the drawn spline curve
    "NORMAL_SIGN_FLIP": False,    # Mirror normal vectors like shear vectors
    "CACHE_SIZE": 32,             # Memoized results per processor (0 disables)
    "LOG_LEVEL": "INFO",
}
