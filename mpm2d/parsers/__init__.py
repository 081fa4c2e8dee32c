from mpm2d.parsers.parsing import add_configuration, parser

__all__ = ["add_configuration", "parser"]
