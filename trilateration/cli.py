"""
CLI entry point for the trilaterate command.

This provides a user-friendly command-line interface for the solver.
"""
from trilateration.runner import main

# Re-export main for the console_scripts entry point
__all__ = ['main']

if __name__ == '__main__':
    raise SystemExit(main())
