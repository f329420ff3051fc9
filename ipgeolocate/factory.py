from ipgeolocate.adapters.base import ServiceAdapter
from ipgeolocate.adapters.freegeoip import FREEGEOIP
from ipgeolocate.adapters.ip_api import IP_API
from ipgeolocate.adapters.ipapi_co import IPAPI_CO
from ipgeolocate.adapters.ipwhois import IPWHOIS
from ipgeolocate.models.request_models import Service, resolve_service


class ServiceAdapterFactory:
    """Factory for backend adapters.

    Given a Service (or its exact name), returns the adapter describing that backend.
    """

    ADAPTERS_MAP: dict[Service, ServiceAdapter] = {
        Service.ipwhois: IPWHOIS,
        Service.ipapi: IP_API,
        Service.ipapico: IPAPI_CO,
        Service.freegeoip: FREEGEOIP,
    }

    def __call__(self, service: Service | str) -> ServiceAdapter:
        return self.ADAPTERS_MAP[resolve_service(service)]
