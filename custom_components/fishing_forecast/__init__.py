import logging
from typing import Any, Dict

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv
from homeassistant.util import dt as dt_util

from .const import (
    ALGORITHMS,
    CONF_ALGORITHM,
    CONF_MAX_DAYS,
    CONF_NAME,
    CONF_SPECIES,
    CONF_TIME_ZONE,
    DEFAULT_ALGORITHM,
    DEFAULT_MAX_DAYS,
    DEFAULT_NAME,
    DOMAIN,
)
from .forecast import FishingForecastEngine
from .score import get_scorer
from .species_loader import SpeciesLoader

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

ENGINE_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Optional(CONF_SPECIES): vol.Any(None, str),
        vol.Optional(CONF_ALGORITHM, default=DEFAULT_ALGORITHM): vol.In(ALGORITHMS),
        vol.Optional(CONF_TIME_ZONE): vol.Any(None, str),
        vol.Optional(CONF_MAX_DAYS, default=DEFAULT_MAX_DAYS): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=DEFAULT_MAX_DAYS)
        ),
    },
    extra=vol.ALLOW_EXTRA,
)


async def async_build_engine(hass: HomeAssistant, options: Dict[str, Any]) -> FishingForecastEngine:
    """Validate options and build a forecast engine with the species catalog loaded."""
    config = ENGINE_CONFIG_SCHEMA(dict(options))

    time_zone = dt_util.DEFAULT_TIME_ZONE
    if config.get(CONF_TIME_ZONE):
        time_zone = dt_util.get_time_zone(config[CONF_TIME_ZONE])
        if time_zone is None:
            _LOGGER.warning(
                "Unknown time zone %s; using %s", config[CONF_TIME_ZONE], dt_util.DEFAULT_TIME_ZONE
            )
            time_zone = dt_util.DEFAULT_TIME_ZONE

    loader = SpeciesLoader(hass)
    await loader.async_load_profiles()

    species = config.get(CONF_SPECIES)
    if species and loader.resolve(species) is None:
        _LOGGER.warning("Species '%s' not found in catalog; general scoring will be used", species)

    return FishingForecastEngine(
        get_scorer(config[CONF_ALGORITHM], time_zone=time_zone),
        species_loader=loader,
        species=species,
        max_days=config[CONF_MAX_DAYS],
    )


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up Fishing Forecast from YAML (not used)."""
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Fishing Forecast from a config entry."""
    _LOGGER.debug("Setting up entry: %s", entry.entry_id)
    options = {**entry.data, **(getattr(entry, "options", None) or {})}
    engine = await async_build_engine(hass, options)

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = engine
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.debug("Unloading entry: %s", entry.entry_id)
    hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    return True
