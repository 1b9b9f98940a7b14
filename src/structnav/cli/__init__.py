"""
CLI Command Modules

Each module holds one command group registered on the main app.
"""

from structnav.cli import scope, bracket, sexp, config_cmd

__all__ = ['scope', 'bracket', 'sexp', 'config_cmd']
