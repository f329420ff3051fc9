import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, WARNING, ERROR

# Deadline handed to the HTTP client for every backend request.
TIMEOUT_SECONDS = float(os.getenv("IPGEOLOCATE_TIMEOUT_SECONDS", "5.0"))

DEFAULT_SERVICE = os.getenv("IPGEOLOCATE_DEFAULT_SERVICE", "ipapi")

HOST = os.getenv("IPGEOLOCATE_HOST", "127.0.0.1")
PORT = int(os.getenv("IPGEOLOCATE_PORT", "8000"))
RELOAD = os.getenv("IPGEOLOCATE_RELOAD", "false").lower() in ("1", "true", "yes")

# Used by the CLI when no address is given.
PUBLIC_IP_URL = os.getenv("IPGEOLOCATE_PUBLIC_IP_URL", "http://ifconfig.io/ip")
