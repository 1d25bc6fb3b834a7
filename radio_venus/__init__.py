"""Radio Venus: curation pipeline for a musician catalog keyed by Venus sign.

Resolves birth dates, genre classifications and stable identities for
artist names from several unreliable providers, and merges them into a
canonical snapshot without ever losing curated or cached data.
"""

__version__ = "0.1.0"
