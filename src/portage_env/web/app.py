"""Flask application factory for the mapping API.

The ``create_app`` function loads the registry and returns a Flask app
with three endpoints:

- ``GET /api/mappings`` — list every mapping with its package count.
- ``GET /api/mappings/<profile>`` — list the atoms of one mapping.
- ``POST /api/check`` — parse an atom and report the conflicting mapping.
"""

from __future__ import annotations

import os

from flask import Flask, Response, jsonify, request

from portage_env.atom import AtomParseError, parse_atom
from portage_env.config import Settings
from portage_env.registry import MappingRegistry

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def create_app(settings: Settings | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Where to find the mappings (environment defaults if None).

    Returns:
        A configured Flask application ready to serve.

    Raises:
        MappingLoadError: If the mappings cannot be loaded.
        AtomParseError: If a backing store holds a malformed atom.

    """
    if settings is None:
        settings = Settings.from_environ(os.environ)
    registry = MappingRegistry.load(settings.config_dir)

    app = Flask(__name__)

    @app.route("/api/mappings")
    def mappings() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return every mapping with its package count."""
        return jsonify(
            {
                "mappings": [
                    {"name": name, "packages": count} for name, count in registry.summary()
                ]
            }
        )

    @app.route("/api/mappings/<profile>")
    def mapping_atoms(profile: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the atoms assigned to *profile*, sorted by text."""
        mapping = registry.get(profile)
        if mapping is None:
            return jsonify({"error": f"Unknown profile '{profile}'"}), _HTTP_NOT_FOUND
        return jsonify({"name": mapping.name, "atoms": sorted(str(a) for a in mapping)})

    @app.route("/api/check", methods=["POST"])
    def check() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Report which mapping, if any, already holds an atom.

        Expects JSON body: ``{"atom": "..."}``

        Returns:
            JSON with ``atom`` (canonical text) and ``conflict`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("atom"), str):
            return jsonify({"error": "Missing 'atom' field"}), _HTTP_BAD_REQUEST

        try:
            atom = parse_atom(data["atom"])
        except AtomParseError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        conflict = registry.find_conflict(atom)
        return jsonify(
            {"atom": str(atom), "conflict": conflict.name if conflict is not None else None}
        )

    return app


def main() -> None:
    """Run the development server.

    This is the ``epenv-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
