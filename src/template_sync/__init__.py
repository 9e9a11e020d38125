"""Template synchronisation decision engine.

Classifies template-derived files in a project against their recorded
baseline and the latest upstream template, and renders conflicts for
human review instead of merging them blindly.
"""

__version__ = "0.3.0"
