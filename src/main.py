"""Main entry point for the terminal kanban board.

Usage: kanban [CONTEXT_NAME] [--log-level LEVEL]
"""
from cli import main

if __name__ == "__main__":
    main()
