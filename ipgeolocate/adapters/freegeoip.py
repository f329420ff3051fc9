from ipgeolocate.adapters.base import FieldMapping, ServiceAdapter
from ipgeolocate.extractor import FieldKind
from ipgeolocate.models.request_models import Service

FREEGEOIP = ServiceAdapter(
    service=Service.freegeoip,
    host="freegeoip.app",
    url_template="https://freegeoip.app/json/{ip}",
    field_map=(
        FieldMapping(key="latitude", target="latitude", kind=FieldKind.number),
        FieldMapping(key="longitude", target="longitude", kind=FieldKind.number),
        FieldMapping(key="city", target="city"),
        FieldMapping(key="region_name", target="region"),
        FieldMapping(key="country_name", target="country"),
        FieldMapping(key="time_zone", target="timezone"),
    ),
)
