"""Test regional and global resultant aggregation."""

import numpy as np
import pytest

from spinevec.spine.aggregator import VectorAggregator
from spinevec.spine.force_vectors import ForceVectorCalculator
from spinevec.spine.models import GlobalResult, Region, RegionResult

pytestmark = pytest.mark.unit


@pytest.fixture
def golden_vectors(internal_config, golden_points, golden_angles):
    vectors, _ = ForceVectorCalculator(internal_config).compute(golden_points, golden_angles, 60.0)
    return vectors


def test_regional_resultants(internal_config, golden_vectors):
    regional, _ = VectorAggregator(internal_config).aggregate(golden_vectors)
    assert set(regional) == set(Region)

    c = regional[Region.CERVICAL]
    assert isinstance(c, RegionResult)
    assert c.label == "RSV-C"
    assert c.region == Region.CERVICAL
    assert c.n_levels == 2
    assert c.resultant_vector.x == pytest.approx(6.449525, abs=1e-5)
    assert c.resultant_vector.y == pytest.approx(1.056698, abs=1e-5)
    assert c.magnitude == 7
    assert c.normal_magnitude == 40
    assert c.angle_deg == 9
    assert c.display_angle_deg == 171
    assert c.ratio == 0.2

    t = regional[Region.THORACIC]
    assert t.label == "RSV-T"
    assert t.resultant_vector.x == pytest.approx(-1.891206, abs=1e-5)
    assert t.angle_deg == 177
    assert t.display_angle_deg == 3
    assert (t.magnitude, t.normal_magnitude) == (2, 41)
    assert t.ratio == 0.0

    lum = regional[Region.LUMBAR]
    assert lum.label == "RSV-L"
    assert (lum.display_angle_deg, lum.magnitude, lum.normal_magnitude, lum.ratio) == (174, 8, 81, 0.1)


def test_global_resultant(internal_config, golden_vectors):
    _, global_result = VectorAggregator(internal_config).aggregate(golden_vectors)
    assert isinstance(global_result, GlobalResult)
    assert global_result.label == "GSV"
    assert global_result.region is None
    assert global_result.n_levels == 6
    assert global_result.resultant_vector.x == pytest.approx(12.594459, abs=1e-5)
    assert global_result.resultant_vector.y == pytest.approx(1.949204, abs=1e-5)
    assert global_result.normal_resultant_vector.y == pytest.approx(160.367762, abs=1e-5)
    assert (global_result.display_angle_deg, global_result.magnitude,
            global_result.normal_magnitude, global_result.ratio) == (171, 13, 161, 0.2)


def test_global_equals_sum_of_regions(internal_config, golden_vectors):
    regional, global_result = VectorAggregator(internal_config).aggregate(golden_vectors)
    shear = np.sum([r.resultant_vector.as_array() for r in regional.values()], axis=0)
    normal = np.sum([r.normal_resultant_vector.as_array() for r in regional.values()], axis=0)
    np.testing.assert_allclose(shear, global_result.resultant_vector.as_array(), atol=1e-6)
    np.testing.assert_allclose(normal, global_result.normal_resultant_vector.as_array(), atol=1e-6)


def test_triangle_inequality(internal_config, golden_vectors):
    regional, global_result = VectorAggregator(internal_config).aggregate(golden_vectors)
    assert global_result.resultant_vector.norm() <= sum(v.shear.norm() for v in golden_vectors) + 1e-9
    for region, result in regional.items():
        members = [v for v in golden_vectors if v.region == region]
        assert result.resultant_vector.norm() <= sum(v.shear.norm() for v in members) + 1e-9


def test_empty_input(internal_config):
    regional, global_result = VectorAggregator(internal_config).aggregate(())
    for result in list(regional.values()) + [global_result]:
        assert result.n_levels == 0
        assert result.magnitude == 0
        assert result.normal_magnitude == 0
        assert result.resultant_vector.norm() == 0.0
        assert result.angle_deg == 0


def test_summary_decimals(make_config, golden_vectors):
    config = make_config(output={"summary_decimals": 2})
    regional, global_result = VectorAggregator(config).aggregate(golden_vectors)
    assert regional[Region.CERVICAL].magnitude == pytest.approx(6.54)
    assert global_result.magnitude == pytest.approx(12.74)
