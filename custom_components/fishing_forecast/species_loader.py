"""Species profile loader and resolver for Fishing Forecast."""
import json
import logging
import os
import re
from typing import Dict, List, Optional

from homeassistant.core import HomeAssistant

from .data_schema import SpeciesProfile
from .exceptions import SpeciesCatalogError

_LOGGER = logging.getLogger(__name__)

PROFILES_PATH = os.path.join(os.path.dirname(__file__), "species_profiles.json")

REQUIRED_FIELDS = (
    "name",
    "optimal_temp_range",
    "tolerable_temp_range",
    "optimal_water_temp_range",
    "tolerable_water_temp_range",
    "pressure_sensitivity",
    "wind_tolerance",
    "tide_importance",
    "current_speed_preference",
    "optimal_current_speed",
    "activity_multipliers",
    "low_light_preference",
    "precipitation_tolerance",
    "seasonal_peaks",
)

FUZZY_PREFIX_LENGTH = 6


def normalize_species_key(value: str) -> str:
    """Lowercase, turn whitespace runs into hyphens and drop anything outside [a-z-]."""
    key = re.sub(r"\s+", "-", str(value).strip().lower())
    return re.sub(r"[^a-z-]", "", key)


def _read_catalog(path: str) -> Dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as err:
        raise SpeciesCatalogError(f"Species catalog not found: {path}") from err
    except json.JSONDecodeError as err:
        raise SpeciesCatalogError(f"Invalid JSON in species catalog {path}: {err}") from err


class SpeciesLoader:
    """Load species profiles from JSON and resolve free-text species names."""

    def __init__(self, hass: Optional[HomeAssistant] = None, path: str = PROFILES_PATH):
        """Initialize the species loader."""
        self.hass = hass
        self.path = path
        self.version: Optional[str] = None
        self._profiles: Optional[Dict[str, SpeciesProfile]] = None

    async def async_load_profiles(self) -> None:
        """Load species profiles in the executor."""
        if self.hass is None:
            self.load_profiles()
            return
        await self.hass.async_add_executor_job(self.load_profiles)

    def load_profiles(self) -> None:
        """Load and validate the catalog; raises SpeciesCatalogError on bad data."""
        try:
            raw = _read_catalog(self.path)
            self._profiles = self._validate(raw)
        except SpeciesCatalogError:
            _LOGGER.exception("Failed to load species profiles from %s", self.path)
            raise
        self.version = str(raw.get("version", "unknown"))
        _LOGGER.info(
            "Loaded %d species profiles (version %s)", len(self._profiles), self.version
        )

    @staticmethod
    def _validate(raw: Dict) -> Dict[str, SpeciesProfile]:
        if not isinstance(raw, dict) or not isinstance(raw.get("species"), dict):
            raise SpeciesCatalogError("Species catalog must contain a 'species' mapping")

        profiles: Dict[str, SpeciesProfile] = {}
        for species_id, data in raw["species"].items():
            if not isinstance(data, dict):
                raise SpeciesCatalogError(f"Species '{species_id}' is not an object")
            missing = [f for f in REQUIRED_FIELDS if f not in data]
            if missing:
                raise SpeciesCatalogError(
                    f"Species '{species_id}' is missing fields: {', '.join(missing)}"
                )
            profile = dict(data)
            profile["id"] = species_id
            profile["aliases"] = [normalize_species_key(a) for a in data.get("aliases", [])]
            profiles[species_id] = profile  # type: ignore[assignment]
        return profiles

    @property
    def profiles(self) -> Dict[str, SpeciesProfile]:
        if self._profiles is None:
            self.load_profiles()
        return self._profiles  # type: ignore[return-value]

    def get_species(self, species_id: str) -> Optional[SpeciesProfile]:
        """Get a specific species profile by exact ID."""
        profile = self.profiles.get(species_id)
        return dict(profile) if profile else None  # type: ignore[return-value]

    def get_all_species(self) -> List[SpeciesProfile]:
        """Get all species in catalog order."""
        return [dict(p) for p in self.profiles.values()]  # type: ignore[misc]

    def species_ids(self) -> List[str]:
        return list(self.profiles)

    def resolve(self, query: Optional[str]) -> Optional[SpeciesProfile]:
        """Resolve a free-text species name to a profile, or None.

        Tries an exact id, then the normalized id or an alias, then a fuzzy
        match (display-name containment either way, or a shared 6-character
        prefix). The first catalog entry that matches wins.
        """
        if query is None:
            return None
        text = str(query).strip()
        if not text:
            return None

        profiles = self.profiles
        if text in profiles:
            return self.get_species(text)

        normalized = normalize_species_key(text)
        for species_id, profile in profiles.items():
            if normalized == species_id or normalized in profile.get("aliases", []):
                return self.get_species(species_id)

        lowered = text.lower()
        prefix = normalized[:FUZZY_PREFIX_LENGTH]
        for species_id, profile in profiles.items():
            name = str(profile.get("name", "")).lower()
            if name and (name in lowered or lowered in name):
                _LOGGER.debug("Fuzzy matched species '%s' to %s by name", query, species_id)
                return self.get_species(species_id)
            if len(prefix) == FUZZY_PREFIX_LENGTH and species_id[:FUZZY_PREFIX_LENGTH] == prefix:
                _LOGGER.debug("Fuzzy matched species '%s' to %s by prefix", query, species_id)
                return self.get_species(species_id)

        _LOGGER.debug("No species profile matches '%s'", query)
        return None
