from ipgeolocate.adapters.base import FieldMapping, ServiceAdapter, SuccessGate
from ipgeolocate.extractor import FieldKind
from ipgeolocate.models.request_models import Service

# ipwhois.app sends coordinates as strings and reports exhausted quota with
# {"success": false, "message": "You've hit the monthly limit"}.
IPWHOIS = ServiceAdapter(
    service=Service.ipwhois,
    host="ipwhois.app",
    url_template="http://ipwhois.app/json/{ip}",
    success_gate=SuccessGate(key="success", expected=True, message_key="message"),
    field_map=(
        FieldMapping(key="latitude", target="latitude", kind=FieldKind.string),
        FieldMapping(key="longitude", target="longitude", kind=FieldKind.string),
        FieldMapping(key="city", target="city"),
        FieldMapping(key="region", target="region"),
        FieldMapping(key="country", target="country"),
        FieldMapping(key="country_code", target="country_code"),
        FieldMapping(key="timezone", target="timezone"),
        FieldMapping(key="timezone_gmt", target="timezone_gmt"),
        FieldMapping(key="isp", target="isp", required=False),
        FieldMapping(key="type", target="ip_type", required=False),
    ),
)
