from urllib.parse import quote

import requests

MAPBOX_GEOCODE_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json"


class GeocodeError(Exception):
    """The geocoding provider could not be reached or returned an unusable answer."""


class GeocodeConfigError(GeocodeError):
    """No provider token is configured."""


def _feature_to_result(feature):
    center = feature.get("center") or []
    if len(center) < 2:
        return None
    # Mapbox orders coordinates as [lng, lat]
    return {
        "id": feature.get("id"),
        "place_name": feature.get("text") or feature.get("place_name"),
        "place_address": feature.get("place_name"),
        "lat": center[1],
        "lng": center[0],
    }


def geocode_place(query, *, token, limit=5, timeout=10, logger=None):
    """Resolve a free-text place name to candidate coordinates."""
    if not token:
        raise GeocodeConfigError("MAPBOX_TOKEN not configured")

    url = MAPBOX_GEOCODE_URL.format(query=quote(query, safe=""))
    try:
        resp = requests.get(
            url,
            params={"access_token": token, "limit": limit},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        if logger:
            logger.warning("Geocoding request failed: %s", exc)
        raise GeocodeError("Geocoding service unreachable") from exc

    if resp.status_code != 200:
        if logger:
            logger.warning("Mapbox API error: %s", resp.status_code)
        raise GeocodeError(f"Mapbox API error: {resp.status_code}")

    try:
        features = resp.json().get("features") or []
    except (ValueError, AttributeError) as exc:
        raise GeocodeError("Malformed geocoding response") from exc

    results = []
    for feature in features:
        result = _feature_to_result(feature)
        if result:
            results.append(result)
    return results
