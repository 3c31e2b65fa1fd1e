"""Allow ``python -m robofinder``."""
from robofinder.cli import cli

if __name__ == "__main__":
    cli(prog_name="robofinder")
