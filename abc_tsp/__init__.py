"""
Artificial Bee Colony search for the symmetric TSP, with spreadsheet/TSPLIB loaders and a CLI.
"""

__all__ = [
    "cli",
    "colony",
    "config",
    "data",
    "distance",
    "errors",
    "executor",
    "report",
]
