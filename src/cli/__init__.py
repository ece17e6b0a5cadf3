"""Command-line tools for Concert Recap.

- ``python -m src.cli.search "<query>"``: hybrid artist search, with
  ``--json`` for machine-readable output and ``--setlist`` to also print
  the top result's average setlist.

``python -m src.cli`` runs the search tool.
"""
