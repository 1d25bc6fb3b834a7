"""Command-line tools for the Radio Venus curation pipeline.

All commands live in :mod:`radio_venus.cli.curate` and run as
``python -m radio_venus.cli <command>``:

- ``build`` -- merge the curated seed, the previous snapshot and fresh
  candidates, enrich them and write the snapshot and index.
- ``verify`` -- re-check stored genres against the authority and write a
  resumable report.
- ``discover`` -- breadth-first discovery over similar artists.
- ``collect-notfound`` / ``harvest-tags`` / ``propose-patch`` -- report
  post-processing.
- ``stats`` -- sign and genre coverage.
- ``venus`` -- Venus sign for a birth date.
- ``index`` -- rebuild the SQLite index from the snapshot.
"""
