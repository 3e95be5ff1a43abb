"""Command line interface: the Typer app lives in ``cli.app``, the menu in ``cli.menu``."""
