"""Allow ``python -m stackchart``."""

from stackchart.interfaces.cli import main

if __name__ == "__main__":
    main()
