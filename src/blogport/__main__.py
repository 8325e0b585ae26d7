"""Allow ``python -m blogport``."""

from blogport.cli.app import app

if __name__ == "__main__":
    app()
