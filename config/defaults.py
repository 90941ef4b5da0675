"""
Default viewer configuration.

Every language's configuration is merged on top of this mapping. Consumers
treat its shape as opaque; the loader only relies on it being a dict.
"""

from typing import Any

CONFIG_DEFAULTS: dict[str, Any] = {
    "version": "1.0",
    "layout": {
        "title": "",
        "nav": {
            "zoom": "buttons",
            "extra": ["geoLocator", "home", "help", "fullscreen"],
        },
        "sideMenu": {
            "logo": True,
            "items": [["layers", "basemap"], ["fullscreen", "export", "share", "touch", "help", "about"]],
        },
    },
    "map": {
        "extentSets": [],
        "lodSets": [],
        "tileSchemas": [],
        "baseMaps": [],
        "layers": [],
        "components": {
            "geoSearch": {"enabled": False},
            "mouseInfo": {"enabled": True, "spatialReference": {"wkid": 4326}},
            "northArrow": {"enabled": True},
            "overviewMap": {"enabled": True},
            "scaleBar": {"enabled": True},
        },
    },
    "services": {
        "proxyUrl": None,
        "exportMapUrl": None,
        "geometryUrl": None,
    },
}
