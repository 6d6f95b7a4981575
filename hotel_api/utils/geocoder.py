import logging
from typing import List, Optional

import httpx
from fastapi import Request
from pydantic import BaseModel

from hotel_api.utils.errors import GeocodeError

logger = logging.getLogger(__name__)

MAPQUEST_URL = "https://www.mapquestapi.com/geocoding/v1/address"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeocodeResult(BaseModel):
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None
    zipcode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class Geocoder:
    """
    Resolves free-form addresses and postal codes to coordinates.

    Supports the MapQuest geocoding API and OpenStreetMap Nominatim.
    """

    def __init__(self, provider: str = "mapquest", api_key: str = "", timeout: float = 10):
        self.provider = provider.lower()
        self.api_key = api_key
        self.timeout = timeout

        if self.provider == "mapquest" and not self.api_key:
            logger.warning("GEOCODER_API_KEY not set. Geocoding requests will fail.")

    def geocode(self, query: str) -> List[GeocodeResult]:
        try:
            with httpx.Client(timeout=self.timeout) as client:
                if self.provider == "mapquest":
                    r = client.get(MAPQUEST_URL, params={"key": self.api_key, "location": query})
                    r.raise_for_status()
                    return self._parse_mapquest(r.json())
                if self.provider == "nominatim":
                    r = client.get(
                        NOMINATIM_URL,
                        params={"q": query, "format": "json", "addressdetails": 1},
                        headers={"User-Agent": "hotel-api"},
                    )
                    r.raise_for_status()
                    return self._parse_nominatim(r.json())
        except httpx.HTTPError as e:
            logger.error("Geocoding request for %r failed: %s", query, e)
            raise GeocodeError("Geocoding service unavailable")
        raise GeocodeError(f"Unsupported geocoder provider: {self.provider}")

    @staticmethod
    def _parse_mapquest(body: dict) -> List[GeocodeResult]:
        results = []
        for result in body.get("results", []):
            for loc in result.get("locations", []):
                lat_lng = loc.get("latLng") or {}
                if "lat" not in lat_lng or "lng" not in lat_lng:
                    continue
                street = loc.get("street")
                city = loc.get("adminArea5")
                state = loc.get("adminArea3")
                zipcode = loc.get("postalCode")
                country = loc.get("adminArea1")
                parts = [p for p in [street, city, state, zipcode, country] if p]
                results.append(GeocodeResult(
                    latitude=lat_lng["lat"],
                    longitude=lat_lng["lng"],
                    formatted_address=", ".join(parts) or None,
                    zipcode=zipcode or None,
                    city=city or None,
                    state=state or None,
                    country=country or None,
                ))
        return results

    @staticmethod
    def _parse_nominatim(body: list) -> List[GeocodeResult]:
        results = []
        for item in body:
            address = item.get("address") or {}
            results.append(GeocodeResult(
                latitude=float(item["lat"]),
                longitude=float(item["lon"]),
                formatted_address=item.get("display_name"),
                zipcode=address.get("postcode"),
                city=address.get("city") or address.get("town"),
                state=address.get("state"),
                country=address.get("country_code", "").upper() or None,
            ))
        return results


def get_geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder
