"""Test result table assembly and the result data model."""

import pandas as pd
import pytest

from spinevec.spine.aggregator import VectorAggregator
from spinevec.spine.force_vectors import ForceVectorCalculator
from spinevec.spine.models import ROW_COLUMNS, LevelRow, Region, SpineVectorResult, Vector2D
from spinevec.spine.result_packer import ResultPacker

pytestmark = pytest.mark.unit


@pytest.fixture
def packed(internal_config, golden_points, golden_angles):
    vectors, excluded = ForceVectorCalculator(internal_config).compute(golden_points, golden_angles, 60.0)
    regional, global_result = VectorAggregator(internal_config).aggregate(vectors)
    return ResultPacker(internal_config).pack(vectors, regional, global_result, 60.0, excluded)


def test_rows_match_reference_table(packed, golden_rows):
    assert isinstance(packed, SpineVectorResult)
    assert [row.as_list() for row in packed.rows] == golden_rows


def test_summary_rows_follow_levels(packed):
    labels = [row.label for row in packed.rows]
    assert labels[-4:] == ["RSV-C", "RSV-T", "RSV-L", "GSV"]
    assert len(packed.rows) == len(packed.level_vectors) + 4


def test_level_row_rounding(make_config, internal_config, golden_points, golden_angles):
    vectors, _ = ForceVectorCalculator(internal_config).compute(golden_points, golden_angles, 60.0)

    row = ResultPacker(internal_config).level_row(vectors[0])
    assert isinstance(row, LevelRow)
    assert (row.angle_deg, row.shear_force, row.normal_force, row.ratio) == (-9.8, -15.6, 90.0, -0.2)

    precise = ResultPacker(make_config(output={"row_decimals": 3})).level_row(vectors[0])
    assert (precise.angle_deg, precise.shear_force, precise.normal_force, precise.ratio) == (
        -9.846, -15.613, 89.958, -0.174)


def test_summary_row_uses_display_angle(packed):
    row = ResultPacker.summary_row(packed.thoracic)
    assert row.angle_deg == 3
    assert row.label == "RSV-T"


def test_result_accessors(packed):
    assert packed.is_valid is True
    assert packed.weight_kg == 60.0
    assert packed.excluded_labels == ()
    assert packed.regions[Region.LUMBAR] is packed.lumbar
    assert packed.global_.label == "GSV"


def test_global_alias(packed):
    dumped = packed.model_dump(by_alias=True)
    assert "global" in dumped
    assert dumped["global"]["label"] == "GSV"


def test_to_dataframe(packed):
    df = packed.to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ROW_COLUMNS
    assert df.shape == (10, 5)
    assert df.loc[df["label"] == "GSV", "shear_force"].item() == 13
    assert df["label"].tolist()[:6] == ["C5", "C6", "T6", "T7", "L2", "L3"]


def test_result_is_immutable(packed):
    with pytest.raises(Exception):
        packed.weight_kg = 70.0


class TestVector2D:
    """Plain vector helpers."""

    def test_add(self):
        assert Vector2D(x=1, y=2) + Vector2D(x=3, y=-1) == Vector2D(x=4, y=1)

    def test_norm(self):
        assert Vector2D(x=3, y=4).norm() == 5.0

    def test_array_round_trip(self):
        v = Vector2D.from_array([1.5, -2.0])
        assert v.as_array().tolist() == [1.5, -2.0]
