"""API service entry point."""

from api_service.startup import API_SERVICE
from shared import run


def main() -> None:
    run(API_SERVICE)


if __name__ == "__main__":
    main()
