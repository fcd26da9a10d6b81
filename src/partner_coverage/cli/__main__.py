# Entry point for running the CLI as a module
# Allows execution via: python -m partner_coverage.cli

from partner_coverage.cli import app

if __name__ == "__main__":
    app()
