from ipgeolocate.adapters.base import FieldMapping, ServiceAdapter
from ipgeolocate.extractor import FieldKind
from ipgeolocate.models.request_models import Service

IPAPI_CO = ServiceAdapter(
    service=Service.ipapico,
    host="ipapi.co",
    url_template="https://ipapi.co/{ip}/json/",
    field_map=(
        FieldMapping(key="latitude", target="latitude", kind=FieldKind.number),
        FieldMapping(key="longitude", target="longitude", kind=FieldKind.number),
        FieldMapping(key="city", target="city"),
        FieldMapping(key="region", target="region"),
        FieldMapping(key="country_name", target="country"),
        FieldMapping(key="timezone", target="timezone"),
    ),
)
