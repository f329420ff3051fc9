import uvicorn

from ipgeolocate.config import HOST, PORT, RELOAD


def main() -> None:
    """Run the geolocation HTTP service with uvicorn."""
    uvicorn.run(
        "ipgeolocate.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
    )


if __name__ == "__main__":
    main()
