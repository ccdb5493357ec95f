"""Allow ``python -m vendorpatch``."""

from vendorpatch.cli.main import run

if __name__ == "__main__":
    run()
