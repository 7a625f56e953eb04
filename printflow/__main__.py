"""
Entry point for running printflow as a module: python -m printflow
"""

from printflow.cli.commands import app

if __name__ == "__main__":
    app()
