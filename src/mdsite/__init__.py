"""mdsite: Markdown posts -> static HTML blog"""

__version__ = "0.1.0"
