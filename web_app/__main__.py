"""Web app entry point."""

from shared import run
from web_app.startup import WEB_APP


def main() -> None:
    run(WEB_APP)


if __name__ == "__main__":
    main()
