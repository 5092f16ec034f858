import pytest

from newstrend.errors import InvalidConfiguration
from newstrend.trending.geo import cluster_key, haversine_distance_km


def test_cluster_key_is_pure():
    assert cluster_key(28.6139, 77.2090, 0.5) == cluster_key(28.6139, 77.2090, 0.5)


def test_cluster_key_rounds_to_nearest_multiple():
    assert cluster_key(28.6139, 77.2090, 0.5) == "28.50_77.00"
    assert cluster_key(28.76, 77.26, 0.5) == "29.00_77.50"


def test_nearby_coordinates_share_a_cluster():
    centre = cluster_key(40.0, -74.0, 0.5)
    assert cluster_key(40.2, -74.2, 0.5) == centre
    assert cluster_key(39.8, -73.8, 0.5) == centre


def test_float_jitter_does_not_split_clusters():
    assert cluster_key(0.1 + 0.2, 0.3, 0.1) == cluster_key(0.3, 0.3, 0.1)


def test_negative_zero_is_normalized():
    assert cluster_key(-0.1, -0.1, 0.5) == "0.00_0.00"


def test_negative_coordinates():
    assert cluster_key(-33.87, 151.21, 0.5) == "-34.00_151.00"


@pytest.mark.parametrize("degrees", [0, -0.5])
def test_cluster_key_rejects_non_positive_granularity(degrees):
    with pytest.raises(InvalidConfiguration):
        cluster_key(10.0, 10.0, degrees)


def test_haversine_zero_for_same_point():
    assert haversine_distance_km(51.5074, -0.1278, 51.5074, -0.1278) == 0.0


def test_haversine_is_symmetric():
    a = (48.8566, 2.3522)
    b = (40.7128, -74.0060)
    assert haversine_distance_km(*a, *b) == pytest.approx(haversine_distance_km(*b, *a))


def test_haversine_known_distance():
    # London to Paris is roughly 344 km
    assert haversine_distance_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)


def test_haversine_one_degree_of_latitude():
    assert haversine_distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, abs=0.01)
