"""Formal pipeline invariants.

This file documents what each stage MUST produce. Use it as a reviewer
anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "points": [
        "Points are sorted by ascending y before any downstream stage",
        "At least two points are present",
        "Every point has finite x and y",
    ],

    "spline": [
        "Knots are strictly increasing in y",
        "Spline interpolates every landmark (S(y_i) == x_i)",
    ],

    "angles": [
        "One tangent angle per sorted point",
        "All angles are finite and lie in (-180, 180] degrees",
    ],

    "vectors": [
        "One level vector per point with a recognized label",
        "Every level vector belongs to exactly one region",
        "Shear and normal magnitudes are non-negative and finite",
    ],

    "aggregation": [
        "Three regional results (cervical, thoracic, lumbar) and one global result",
        "Global resultant equals the sum of regional resultants within 1e-6",
    ],

    "result": [
        "One row per level vector followed by RSV-C, RSV-T, RSV-L, GSV",
        "Row labels match level vector labels in order",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "points": "REQUIRED",
    "spline": "REQUIRED",
    "angles": "REQUIRED",
    "vectors": "REQUIRED",
    "aggregation": "REQUIRED",
    "result": "REQUIRED",
}
