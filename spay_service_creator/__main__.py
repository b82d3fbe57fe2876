"""Allow ``python -m spay_service_creator``."""

from .cli import main

if __name__ == "__main__":
    main()
