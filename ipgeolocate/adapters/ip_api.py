from ipgeolocate.adapters.base import FieldMapping, ServiceAdapter
from ipgeolocate.extractor import FieldKind
from ipgeolocate.models.request_models import Service

IP_API = ServiceAdapter(
    service=Service.ipapi,
    host="ip-api.com",
    url_template="http://ip-api.com/json/{ip}",
    field_map=(
        FieldMapping(key="lat", target="latitude", kind=FieldKind.number),
        FieldMapping(key="lon", target="longitude", kind=FieldKind.number),
        FieldMapping(key="city", target="city"),
        FieldMapping(key="regionName", target="region"),
        FieldMapping(key="country", target="country"),
        FieldMapping(key="timezone", target="timezone"),
        FieldMapping(key="isp", target="isp"),
    ),
)
