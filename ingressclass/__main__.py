"""
CLI entry point, when used as a module: `python -m ingressclass`.
"""
from ingressclass import cli

if __name__ == '__main__':
    cli.main()
