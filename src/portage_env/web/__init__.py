"""Browser-facing JSON API for environment mappings.

This package provides a Flask application over the mapping registry.
It is an **optional** extra — install with::

    pip install portage-env[web]

The ``create_app`` factory in ``app.py`` loads every mapping once and
serves:

- ``GET /api/mappings`` — name and package count of each mapping.
- ``GET /api/mappings/<profile>`` — the atoms assigned to one profile.
- ``POST /api/check`` — which mapping (if any) already holds an atom.
"""
