"""designindex - design system artifact indexer.

Builds a single SQLite store (with FTS5 mirrors) out of a design system's
tokens, Vue/React component sources, CSS utility grammars, documentation
pages and icon registry, and serves typed reads over it.
"""

__version__ = "0.1.0"
