"""Geographic helpers: cluster keys and great-circle distance."""

import math

from ..errors import InvalidConfiguration

EARTH_RADIUS_KM = 6371.0


def _snap(value: float, cluster_degrees: float) -> str:
    snapped = round(value / cluster_degrees) * cluster_degrees
    text = f"{snapped:.2f}"
    # -0.00 and 0.00 must be the same bucket
    if text == "-0.00":
        text = "0.00"
    return text


def cluster_key(lat: float, lon: float, cluster_degrees: float) -> str:
    """
    Map a coordinate to the key of the cluster it belongs to.

    Each axis is rounded to the nearest multiple of `cluster_degrees` and
    formatted with two decimals, so float jitter below that precision cannot
    produce distinct keys.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        cluster_degrees: Cluster size in degrees, must be positive

    Returns:
        Key of the form "<lat>_<lon>", e.g. "28.50_77.00"
    """
    if not cluster_degrees > 0:
        raise InvalidConfiguration(f"cluster_degrees must be positive, got {cluster_degrees}")

    return f"{_snap(lat, cluster_degrees)}_{_snap(lon, cluster_degrees)}"


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
